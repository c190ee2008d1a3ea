"""
业务异常定义
"""


class BookManagerException(Exception):
    """基础异常类"""

    error_code = "INTERNAL_SERVER_ERROR"
    http_status = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ResourceNotFoundError(BookManagerException):
    """资源未找到异常"""

    error_code = "RESOURCE_NOT_FOUND"
    http_status = 404


class BookNotFoundError(ResourceNotFoundError):
    """书籍未找到异常"""

    error_code = "BOOK_NOT_FOUND"

    def __init__(self, message: str = "Book not found"):
        super().__init__(message)

    @classmethod
    def with_book_id(cls, book_id: str) -> "BookNotFoundError":
        return cls(f"Book not found (ID: {book_id})")

    @classmethod
    def with_isbn(cls, isbn: str) -> "BookNotFoundError":
        return cls(f"Book not found (ISBN: {isbn})")


class MemberNotFoundError(ResourceNotFoundError):
    """会员未找到异常"""

    error_code = "MEMBER_NOT_FOUND"

    def __init__(self, message: str = "Member not found"):
        super().__init__(message)

    @classmethod
    def with_member_id(cls, member_id: str) -> "MemberNotFoundError":
        return cls(f"Member not found (ID: {member_id})")

    @classmethod
    def with_email(cls, email: str) -> "MemberNotFoundError":
        return cls(f"Member not found (Email: {email})")


class DuplicateResourceError(BookManagerException):
    """重复资源异常（唯一键冲突）"""

    error_code = "DUPLICATE_RESOURCE"
    http_status = 409

    @classmethod
    def with_isbn(cls, isbn: str) -> "DuplicateResourceError":
        return cls(f"Book with ISBN {isbn} already exists")

    @classmethod
    def with_email(cls, email: str) -> "DuplicateResourceError":
        return cls(f"Member with email {email} already exists")


class InvalidArgumentError(BookManagerException):
    """参数不合法异常"""

    error_code = "ILLEGAL_ARGUMENT"
    http_status = 400


class InvalidStateError(BookManagerException):
    """违反业务状态约束异常"""

    error_code = "ILLEGAL_STATE"
    http_status = 400


class InsufficientStockError(InvalidStateError):
    """库存不足异常"""

    def __init__(self, requested: int, available: int):
        super().__init__(
            f"Insufficient stock: requested {requested}, available {available}"
        )
        self.requested = requested
        self.available = available
