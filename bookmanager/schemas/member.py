"""
会员请求/响应结构
"""
from datetime import datetime
from typing import Optional

from pydantic import EmailStr, Field, field_validator

from bookmanager.models.enums import MemberStatus
from bookmanager.schemas.common import CamelModel
from bookmanager.utils.validators import is_blank, is_valid_password, is_valid_phone

PASSWORD_RULE_MESSAGE = "密码需为8~20位，且包含字母、数字和特殊字符(@$!%*#?&)"


def _check_name(v: str) -> str:
    if is_blank(v):
        raise ValueError("姓名不能为空")
    return v


def _check_phone(v: Optional[str]) -> Optional[str]:
    if v is not None and not is_valid_phone(v):
        raise ValueError("电话号码格式不正确")
    return v


class MemberCreateRequest(CamelModel):
    """会员注册请求"""

    email: EmailStr
    password: str
    name: str = Field(min_length=2, max_length=50)
    phone: Optional[str] = None
    status: Optional[MemberStatus] = None

    @field_validator("email")
    @classmethod
    def validate_email_length(cls, v: str) -> str:
        if len(v) > 100:
            raise ValueError("邮箱长度不能超过100")
        return v

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        if not is_valid_password(v):
            raise ValueError(PASSWORD_RULE_MESSAGE)
        return v

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _check_phone(v)


class MemberUpdateRequest(CamelModel):
    """会员资料修改请求（只包含姓名和电话）"""

    name: str = Field(min_length=2, max_length=50)
    phone: Optional[str] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("phone")
    @classmethod
    def validate_phone(cls, v: Optional[str]) -> Optional[str]:
        return _check_phone(v)


class PasswordChangeRequest(CamelModel):
    """
    修改密码请求
    current_password 目前只做非空校验，尚未与已保存的密码比对
    """

    current_password: str = Field(min_length=1)
    new_password: str
    password_confirm: str = Field(min_length=1)

    @field_validator("new_password")
    @classmethod
    def validate_new_password(cls, v: str) -> str:
        if not is_valid_password(v):
            raise ValueError(PASSWORD_RULE_MESSAGE)
        return v


class MemberResponse(CamelModel):
    """会员响应（不包含密码）"""

    member_id: str
    email: str
    name: str
    phone: Optional[str] = None
    status: MemberStatus
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
