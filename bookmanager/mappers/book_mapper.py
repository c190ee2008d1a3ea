"""
书籍 实体 <-> 请求/响应 转换
"""
from bookmanager.models.book import Book
from bookmanager.schemas.book import (
    BookCreateRequest,
    BookResponse,
    BookSummaryResponse,
    BookUpdateRequest,
)


def to_entity(request: BookCreateRequest, book_id: str) -> Book:
    """创建请求 -> 实体"""
    return Book.create(
        book_id=book_id,
        title=request.title,
        author=request.author,
        isbn=request.isbn,
        price=request.price,
        stock_quantity=request.stock_quantity,
        status=request.status,
        publisher=request.publisher,
        description=request.description,
        category=request.category,
        published_at=request.published_at,
    )


def to_response(book: Book) -> BookResponse:
    return BookResponse(
        book_id=book.book_id,
        title=book.title,
        author=book.author,
        isbn=book.isbn,
        publisher=book.publisher,
        price=book.price,
        stock_quantity=book.stock_quantity,
        description=book.description,
        category=book.category,
        status=book.status,
        status_description=book.status.description,
        published_at=book.published_at,
        created_at=book.created_at,
        updated_at=book.updated_at,
    )


def to_summary_response(book: Book) -> BookSummaryResponse:
    return BookSummaryResponse(
        book_id=book.book_id,
        title=book.title,
        author=book.author,
        price=book.price,
        stock_quantity=book.stock_quantity,
        category=book.category,
        status=book.status,
    )


def update_entity_from_request(request: BookUpdateRequest, book: Book) -> None:
    """用更新请求修改实体的基本信息"""
    book.update_info(
        title=request.title,
        author=request.author,
        publisher=request.publisher,
        price=request.price,
        description=request.description,
        category=request.category,
    )
