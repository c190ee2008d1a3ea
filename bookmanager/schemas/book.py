"""
书籍请求/响应结构
"""
from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from bookmanager.models.enums import BookStatus
from bookmanager.schemas.common import CamelModel
from bookmanager.utils.validators import ISBN_MAX_LENGTH, is_blank, is_valid_isbn


def _require_text(value: str, label: str) -> str:
    if is_blank(value):
        raise ValueError(f"{label}不能为空")
    return value


class BookCreateRequest(CamelModel):
    """创建书籍请求"""

    title: str = Field(max_length=200)
    author: str = Field(max_length=100)
    isbn: str = Field(max_length=ISBN_MAX_LENGTH)
    publisher: Optional[str] = Field(None, max_length=100)
    price: int = Field(gt=0, description="价格，必须为正数")
    stock_quantity: Optional[int] = Field(None, ge=0, description="库存数量，默认0")
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, max_length=50)
    status: Optional[BookStatus] = None
    published_at: Optional[datetime] = None

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_text(v, "书名")

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str) -> str:
        return _require_text(v, "作者")

    @field_validator("isbn")
    @classmethod
    def validate_isbn(cls, v: str) -> str:
        if not is_valid_isbn(v):
            raise ValueError("ISBN只能包含数字和连字符")
        return v


class BookUpdateRequest(CamelModel):
    """更新书籍请求（ISBN和库存不可修改）"""

    title: str = Field(max_length=200)
    author: str = Field(max_length=100)
    publisher: Optional[str] = Field(None, max_length=100)
    price: int = Field(gt=0)
    description: Optional[str] = Field(None, max_length=2000)
    category: Optional[str] = Field(None, max_length=50)

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        return _require_text(v, "书名")

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str) -> str:
        return _require_text(v, "作者")


class BookResponse(CamelModel):
    """书籍详情响应"""

    book_id: str
    title: str
    author: str
    isbn: str
    publisher: Optional[str] = None
    price: int
    stock_quantity: int
    description: Optional[str] = None
    category: Optional[str] = None
    status: BookStatus
    status_description: str
    published_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BookSummaryResponse(CamelModel):
    """书籍列表项响应"""

    book_id: str
    title: str
    author: str
    price: int
    stock_quantity: int
    category: Optional[str] = None
    status: BookStatus
