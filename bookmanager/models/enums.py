"""
状态枚举
"""
from enum import Enum


class BookStatus(str, Enum):
    """书籍状态"""

    AVAILABLE = "AVAILABLE"
    OUT_OF_STOCK = "OUT_OF_STOCK"
    DISCONTINUED = "DISCONTINUED"

    @property
    def description(self) -> str:
        return _BOOK_STATUS_DESCRIPTIONS[self]


class MemberStatus(str, Enum):
    """会员状态"""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETED = "DELETED"

    @property
    def description(self) -> str:
        return _MEMBER_STATUS_DESCRIPTIONS[self]


_BOOK_STATUS_DESCRIPTIONS = {
    BookStatus.AVAILABLE: "在售",
    BookStatus.OUT_OF_STOCK: "缺货",
    BookStatus.DISCONTINUED: "停售",
}

_MEMBER_STATUS_DESCRIPTIONS = {
    MemberStatus.ACTIVE: "活跃",
    MemberStatus.INACTIVE: "停用",
    MemberStatus.DELETED: "已注销",
}
