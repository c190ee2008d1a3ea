"""
BookService单元测试
"""
from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError

from bookmanager.exceptions import (
    BookNotFoundError,
    DuplicateResourceError,
    InsufficientStockError,
    InvalidArgumentError,
)
from bookmanager.models.book import Book
from bookmanager.models.enums import BookStatus
from bookmanager.models.page import Page, PageRequest
from bookmanager.repositories.book_repository import BookRepository
from bookmanager.schemas.book import BookCreateRequest, BookUpdateRequest
from bookmanager.services.book_service import UNCATEGORIZED, BookService
from tests.fixtures.sample_data import book_payload


def make_book(**overrides) -> Book:
    values = {
        "book_id": "book-1",
        "title": "Effective Java",
        "author": "Joshua Bloch",
        "isbn": "9780134685991",
        "price": 45000,
        "stock_quantity": 50,
    }
    values.update(overrides)
    return Book.create(**values)


class TestBookService:
    """BookService测试类"""

    @pytest.fixture
    def mock_book_repository(self):
        """模拟BookRepository"""
        repository = AsyncMock(spec=BookRepository)
        repository.save.side_effect = lambda book: book
        return repository

    @pytest.fixture
    def book_service(self, mock_book_repository):
        """创建BookService实例"""
        return BookService(mock_book_repository)

    @pytest.mark.asyncio
    async def test_create_book_success(self, book_service, mock_book_repository):
        """测试成功创建书籍"""
        mock_book_repository.exists_by_isbn.return_value = False
        request = BookCreateRequest(**book_payload())

        result = await book_service.create_book(request)

        mock_book_repository.exists_by_isbn.assert_called_once_with("978-0134685991")
        mock_book_repository.save.assert_called_once()
        assert result.book_id
        assert result.title == "Effective Java"
        assert result.stock_quantity == 100
        assert result.status == BookStatus.AVAILABLE
        assert result.status_description == "在售"

    @pytest.mark.asyncio
    async def test_create_book_defaults(self, book_service, mock_book_repository):
        """测试未指定库存时默认为0"""
        mock_book_repository.exists_by_isbn.return_value = False
        request = BookCreateRequest(title="T", author="A", isbn="123", price=100)

        result = await book_service.create_book(request)

        assert result.stock_quantity == 0
        assert result.status == BookStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_create_book_duplicate_isbn(self, book_service, mock_book_repository):
        """测试创建重复ISBN书籍抛出异常"""
        mock_book_repository.exists_by_isbn.return_value = True

        with pytest.raises(DuplicateResourceError) as exc_info:
            await book_service.create_book(BookCreateRequest(**book_payload()))

        assert "978-0134685991" in exc_info.value.message
        mock_book_repository.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_create_book_constraint_race(self, book_service, mock_book_repository):
        """测试预检查通过但唯一约束冲突时仍返回重复异常"""
        mock_book_repository.exists_by_isbn.return_value = False
        mock_book_repository.save.side_effect = IntegrityError("INSERT", {}, Exception("UNIQUE"))

        with pytest.raises(DuplicateResourceError):
            await book_service.create_book(BookCreateRequest(**book_payload()))

    @pytest.mark.asyncio
    async def test_get_book_by_id(self, book_service, mock_book_repository):
        mock_book_repository.get_by_id.return_value = make_book()

        result = await book_service.get_book_by_id("book-1")

        assert result.book_id == "book-1"
        mock_book_repository.get_by_id.assert_called_once_with("book-1")

    @pytest.mark.asyncio
    async def test_get_book_by_id_not_found(self, book_service, mock_book_repository):
        mock_book_repository.get_by_id.return_value = None

        with pytest.raises(BookNotFoundError):
            await book_service.get_book_by_id("missing")

    @pytest.mark.asyncio
    async def test_get_book_by_isbn_not_found(self, book_service, mock_book_repository):
        mock_book_repository.get_by_isbn.return_value = None

        with pytest.raises(BookNotFoundError) as exc_info:
            await book_service.get_book_by_isbn("0000")

        assert "0000" in exc_info.value.message

    @pytest.mark.asyncio
    async def test_get_all_books_maps_page(self, book_service, mock_book_repository):
        """测试分页结果转换为摘要响应"""
        page_request = PageRequest(page=2, size=1)
        mock_book_repository.find_all.return_value = Page(
            content=[make_book()], page=2, size=1, total_elements=3
        )

        result = await book_service.get_all_books(page_request)

        mock_book_repository.find_all.assert_called_once_with(page_request)
        assert result.page == 2
        assert result.total_pages == 3
        assert result.first is False
        assert result.last is False
        assert result.content[0].title == "Effective Java"

    @pytest.mark.asyncio
    async def test_get_books_by_category_with_status(self, book_service, mock_book_repository):
        page_request = PageRequest()
        mock_book_repository.find_by_category_and_status.return_value = Page([], 1, 10, 0)

        await book_service.get_books_by_category("Programming", page_request, BookStatus.AVAILABLE)

        mock_book_repository.find_by_category_and_status.assert_called_once_with(
            "Programming", BookStatus.AVAILABLE, page_request
        )
        mock_book_repository.find_by_category.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_books_by_category_without_status(self, book_service, mock_book_repository):
        page_request = PageRequest()
        mock_book_repository.find_by_category.return_value = Page([], 1, 10, 0)

        result = await book_service.get_books_by_category("Programming", page_request)

        mock_book_repository.find_by_category.assert_called_once_with("Programming", page_request)
        assert result.total_elements == 0

    @pytest.mark.asyncio
    @pytest.mark.parametrize("min_price, max_price", [(-1, 100), (500, 100)])
    async def test_get_books_by_price_range_invalid(self, book_service, mock_book_repository, min_price, max_price):
        with pytest.raises(InvalidArgumentError):
            await book_service.get_books_by_price_range(min_price, max_price, PageRequest())
        mock_book_repository.find_by_price_between.assert_not_called()

    @pytest.mark.asyncio
    async def test_count_books_by_category(self, book_service, mock_book_repository):
        mock_book_repository.count_by_category.return_value = {"Programming": 2, None: 1}

        result = await book_service.count_books_by_category()

        assert result == {"Programming": 2, UNCATEGORIZED: 1}

    @pytest.mark.asyncio
    async def test_update_book(self, book_service, mock_book_repository):
        """测试更新书籍基本信息"""
        book = make_book(stock_quantity=7)
        mock_book_repository.get_by_id.return_value = book
        request = BookUpdateRequest(title="Effective Java 3rd", author="Bloch", price=50000)

        result = await book_service.update_book("book-1", request)

        assert result.title == "Effective Java 3rd"
        assert result.price == 50000
        assert result.isbn == "9780134685991"
        assert result.stock_quantity == 7
        mock_book_repository.save.assert_called_once_with(book)

    @pytest.mark.asyncio
    async def test_remove_then_add_stock(self, book_service, mock_book_repository):
        """测试售罄后补货的状态变化"""
        book = make_book(stock_quantity=50)
        mock_book_repository.get_by_id.return_value = book

        drained = await book_service.remove_stock("book-1", 50)
        assert drained.stock_quantity == 0
        assert drained.status == BookStatus.OUT_OF_STOCK

        restocked = await book_service.add_stock("book-1", 1)
        assert restocked.stock_quantity == 1
        assert restocked.status == BookStatus.AVAILABLE

    @pytest.mark.asyncio
    async def test_remove_stock_insufficient(self, book_service, mock_book_repository):
        book = make_book(stock_quantity=3)
        mock_book_repository.get_by_id.return_value = book

        with pytest.raises(InsufficientStockError):
            await book_service.remove_stock("book-1", 5)

        assert book.stock_quantity == 3
        mock_book_repository.save.assert_not_called()

    @pytest.mark.asyncio
    @pytest.mark.parametrize("quantity", [0, -5])
    async def test_stock_quantity_must_be_positive(self, book_service, mock_book_repository, quantity):
        """测试数量校验先于查询"""
        with pytest.raises(InvalidArgumentError):
            await book_service.add_stock("missing", quantity)
        with pytest.raises(InvalidArgumentError):
            await book_service.remove_stock("missing", quantity)
        mock_book_repository.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_add_stock_unknown_book(self, book_service, mock_book_repository):
        mock_book_repository.get_by_id.return_value = None

        with pytest.raises(BookNotFoundError):
            await book_service.add_stock("missing", 1)

    @pytest.mark.asyncio
    async def test_change_book_status_bypasses_stock(self, book_service, mock_book_repository):
        mock_book_repository.get_by_id.return_value = make_book(stock_quantity=0, status=BookStatus.OUT_OF_STOCK)

        result = await book_service.change_book_status("book-1", BookStatus.AVAILABLE)

        assert result.status == BookStatus.AVAILABLE
        assert result.stock_quantity == 0

    @pytest.mark.asyncio
    async def test_delete_book(self, book_service, mock_book_repository):
        book = make_book()
        mock_book_repository.get_by_id.return_value = book

        await book_service.delete_book("book-1")

        mock_book_repository.delete.assert_called_once_with(book)

    @pytest.mark.asyncio
    async def test_delete_book_not_found(self, book_service, mock_book_repository):
        mock_book_repository.get_by_id.return_value = None

        with pytest.raises(BookNotFoundError):
            await book_service.delete_book("missing")
        mock_book_repository.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_get_low_stock_books(self, book_service, mock_book_repository):
        mock_book_repository.find_low_stock.return_value = [make_book(stock_quantity=5)]

        result = await book_service.get_low_stock_books(10)

        mock_book_repository.find_low_stock.assert_called_once_with(10)
        assert [book.stock_quantity for book in result] == [5]
