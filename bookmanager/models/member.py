"""
会员模型
"""
from typing import Optional

from sqlalchemy import Column, Enum, String

from bookmanager.database import Base
from bookmanager.models.base import TimestampMixin
from bookmanager.models.enums import MemberStatus


class Member(TimestampMixin, Base):
    """会员模型"""

    __tablename__ = "member"

    member_id = Column(String(36), primary_key=True)
    email = Column(String(100), nullable=False, unique=True, index=True)  # 登录ID
    password = Column(String(255), nullable=False)
    name = Column(String(50), nullable=False, index=True)
    phone = Column(String(20))
    status = Column(
        Enum(MemberStatus, name="member_status", native_enum=False, length=20),
        nullable=False,
        default=MemberStatus.ACTIVE,
        index=True,
    )

    @classmethod
    def register(
        cls,
        member_id: str,
        email: str,
        password: str,
        name: str,
        phone: Optional[str] = None,
        status: Optional[MemberStatus] = None,
    ) -> "Member":
        """创建会员，password 为已编码的凭证"""
        return cls(
            member_id=member_id,
            email=email,
            password=password,
            name=name,
            phone=phone,
            status=status if status is not None else MemberStatus.ACTIVE,
        )

    def update_profile(self, name: str, phone: Optional[str]) -> None:
        """只修改姓名和电话"""
        self.name = name
        self.phone = phone

    def change_password(self, encoded_password: str) -> None:
        self.password = encoded_password

    def change_status(self, status: MemberStatus) -> None:
        self.status = status

    def withdraw(self) -> None:
        """注销（软删除），记录保留"""
        self.status = MemberStatus.DELETED

    def activate(self) -> None:
        self.status = MemberStatus.ACTIVE

    def deactivate(self) -> None:
        self.status = MemberStatus.INACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == MemberStatus.ACTIVE

    def __repr__(self):
        return f"Member(member_id='{self.member_id}', email='{self.email}')"
