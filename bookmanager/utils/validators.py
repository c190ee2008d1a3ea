"""
字段格式校验
"""
import re
from typing import Optional

ISBN_PATTERN = re.compile(r"[0-9\-]+")
PHONE_PATTERN = re.compile(r"01(?:0|1|[6-9])[.-]?(\d{3}|\d{4})[.-]?(\d{4})")
# 至少包含一个字母、一个数字、一个特殊字符，8~20位
PASSWORD_PATTERN = re.compile(r"(?=.*[A-Za-z])(?=.*\d)(?=.*[@$!%*#?&])[A-Za-z\d@$!%*#?&]{8,20}")

ISBN_MAX_LENGTH = 20


def is_valid_isbn(isbn: Optional[str]) -> bool:
    """ISBN只能包含数字和连字符"""
    if not isbn or len(isbn) > ISBN_MAX_LENGTH:
        return False
    return ISBN_PATTERN.fullmatch(isbn) is not None


def is_valid_phone(phone: Optional[str]) -> bool:
    """手机号格式"""
    if not phone:
        return False
    return PHONE_PATTERN.fullmatch(phone) is not None


def is_valid_password(password: Optional[str]) -> bool:
    """密码强度"""
    if not password:
        return False
    return PASSWORD_PATTERN.fullmatch(password) is not None


def is_blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()
