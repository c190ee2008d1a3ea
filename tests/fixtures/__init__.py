"""
测试fixtures包
"""
from .sample_data import (
    SAMPLE_BOOKS,
    SAMPLE_MEMBERS,
    INVALID_ISBN,
    WEAK_PASSWORDS,
    book_payload,
    member_payload,
)

__all__ = [
    "SAMPLE_BOOKS",
    "SAMPLE_MEMBERS",
    "INVALID_ISBN",
    "WEAK_PASSWORDS",
    "book_payload",
    "member_payload",
]
