"""
书籍业务服务层
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy.exc import IntegrityError

from bookmanager.exceptions import BookNotFoundError, DuplicateResourceError, InvalidArgumentError
from bookmanager.mappers import book_mapper
from bookmanager.models.book import Book
from bookmanager.models.enums import BookStatus
from bookmanager.models.page import PageRequest
from bookmanager.repositories.book_repository import BookRepository
from bookmanager.schemas.book import (
    BookCreateRequest,
    BookResponse,
    BookSummaryResponse,
    BookUpdateRequest,
)
from bookmanager.schemas.common import PageResponse
from bookmanager.utils.id_generator import TimeOrderedIdGenerator, generate_id

logger = logging.getLogger(__name__)

UNCATEGORIZED = "UNCATEGORIZED"


class BookService:
    """书籍服务类"""

    def __init__(self, book_repository: BookRepository, id_generator: Optional[TimeOrderedIdGenerator] = None):
        self.book_repository = book_repository
        self._next_id = id_generator.next if id_generator else generate_id

    async def create_book(self, request: BookCreateRequest) -> BookResponse:
        """创建书籍"""
        logger.info(f"创建书籍 - ISBN: {request.isbn}")

        # 检查ISBN是否已存在
        if await self.book_repository.exists_by_isbn(request.isbn):
            raise DuplicateResourceError.with_isbn(request.isbn)

        book = book_mapper.to_entity(request, self._next_id())
        try:
            saved = await self.book_repository.save(book)
        except IntegrityError as e:
            # 并发创建时以数据库唯一约束为准
            logger.warning(f"ISBN唯一约束冲突: {request.isbn}")
            raise DuplicateResourceError.with_isbn(request.isbn) from e

        logger.info(f"创建书籍完成 - ID: {saved.book_id}, Title: {saved.title}")
        return book_mapper.to_response(saved)

    async def get_book_by_id(self, book_id: str) -> BookResponse:
        """根据ID获取书籍"""
        logger.info(f"查询书籍 - ID: {book_id}")
        return book_mapper.to_response(await self._find_book(book_id))

    async def get_book_by_isbn(self, isbn: str) -> BookResponse:
        """根据ISBN获取书籍"""
        logger.info(f"查询书籍 - ISBN: {isbn}")
        book = await self.book_repository.get_by_isbn(isbn)
        if not book:
            raise BookNotFoundError.with_isbn(isbn)
        return book_mapper.to_response(book)

    async def get_all_books(self, page_request: PageRequest) -> PageResponse[BookSummaryResponse]:
        """分页获取书籍列表"""
        logger.info(f"查询书籍列表 - Page: {page_request.page}, Size: {page_request.size}")
        page = await self.book_repository.find_all(page_request)
        return PageResponse.from_page(page, book_mapper.to_summary_response)

    async def search_books_by_title(
        self, title_keyword: str, page_request: PageRequest
    ) -> PageResponse[BookSummaryResponse]:
        """根据标题搜索书籍"""
        logger.info(f"按标题搜索书籍 - Title: {title_keyword}")
        page = await self.book_repository.search_by_title(title_keyword, page_request)
        return PageResponse.from_page(page, book_mapper.to_summary_response)

    async def search_books_by_author(
        self, author_keyword: str, page_request: PageRequest
    ) -> PageResponse[BookSummaryResponse]:
        """根据作者搜索书籍"""
        logger.info(f"按作者搜索书籍 - Author: {author_keyword}")
        page = await self.book_repository.search_by_author(author_keyword, page_request)
        return PageResponse.from_page(page, book_mapper.to_summary_response)

    async def search_books(self, keyword: str, page_request: PageRequest) -> PageResponse[BookSummaryResponse]:
        """标题或作者包含关键字"""
        logger.info(f"按标题/作者搜索书籍 - Keyword: {keyword}")
        page = await self.book_repository.search_by_title_or_author(keyword, page_request)
        return PageResponse.from_page(page, book_mapper.to_summary_response)

    async def get_books_by_category(
        self, category: str, page_request: PageRequest, status: Optional[BookStatus] = None
    ) -> PageResponse[BookSummaryResponse]:
        """根据分类（可选状态）获取书籍"""
        logger.info(f"按分类查询书籍 - Category: {category}, Status: {status}")
        if status is None:
            page = await self.book_repository.find_by_category(category, page_request)
        else:
            page = await self.book_repository.find_by_category_and_status(category, status, page_request)
        return PageResponse.from_page(page, book_mapper.to_summary_response)

    async def get_books_by_status(
        self, status: BookStatus, page_request: PageRequest
    ) -> PageResponse[BookSummaryResponse]:
        logger.info(f"按状态查询书籍 - Status: {status}")
        page = await self.book_repository.find_by_status(status, page_request)
        return PageResponse.from_page(page, book_mapper.to_summary_response)

    async def get_books_by_price_range(
        self, min_price: int, max_price: int, page_request: PageRequest
    ) -> PageResponse[BookSummaryResponse]:
        """价格区间查询"""
        logger.info(f"按价格区间查询书籍 - {min_price} ~ {max_price}")
        if min_price < 0 or max_price < min_price:
            raise InvalidArgumentError(f"Invalid price range: {min_price} ~ {max_price}")
        page = await self.book_repository.find_by_price_between(min_price, max_price, page_request)
        return PageResponse.from_page(page, book_mapper.to_summary_response)

    async def count_books_by_category(self) -> Dict[str, int]:
        """按分类统计书籍数量，未分类的书籍计入 UNCATEGORIZED"""
        counts = await self.book_repository.count_by_category()
        return {
            (category if category is not None else UNCATEGORIZED): count
            for category, count in counts.items()
        }

    async def update_book(self, book_id: str, request: BookUpdateRequest) -> BookResponse:
        """更新书籍基本信息"""
        logger.info(f"更新书籍 - ID: {book_id}")
        book = await self._find_book(book_id)
        book_mapper.update_entity_from_request(request, book)
        await self.book_repository.save(book)
        logger.info(f"更新书籍完成 - ID: {book_id}")
        return book_mapper.to_response(book)

    async def add_stock(self, book_id: str, quantity: int) -> BookResponse:
        """增加库存"""
        logger.info(f"增加库存 - ID: {book_id}, Quantity: {quantity}")
        if quantity <= 0:
            raise InvalidArgumentError("Quantity to add must be positive")

        book = await self._find_book(book_id)
        book.add_stock(quantity)
        await self.book_repository.save(book)

        logger.info(f"增加库存完成 - ID: {book_id}, Stock: {book.stock_quantity}")
        return book_mapper.to_response(book)

    async def remove_stock(self, book_id: str, quantity: int) -> BookResponse:
        """减少库存"""
        logger.info(f"减少库存 - ID: {book_id}, Quantity: {quantity}")
        if quantity <= 0:
            raise InvalidArgumentError("Quantity to remove must be positive")

        book = await self._find_book(book_id)
        book.remove_stock(quantity)  # 库存不足时抛出 InsufficientStockError
        await self.book_repository.save(book)

        logger.info(f"减少库存完成 - ID: {book_id}, Stock: {book.stock_quantity}")
        return book_mapper.to_response(book)

    async def change_book_status(self, book_id: str, status: BookStatus) -> BookResponse:
        """手动修改书籍状态"""
        logger.info(f"修改书籍状态 - ID: {book_id}, Status: {status.value}")
        book = await self._find_book(book_id)
        book.change_status(status)
        await self.book_repository.save(book)
        return book_mapper.to_response(book)

    async def delete_book(self, book_id: str) -> None:
        """删除书籍"""
        logger.info(f"删除书籍 - ID: {book_id}")
        book = await self._find_book(book_id)
        await self.book_repository.delete(book)
        logger.info(f"删除书籍完成 - ID: {book_id}")

    async def get_low_stock_books(self, threshold: int) -> List[BookResponse]:
        """获取低库存书籍"""
        logger.info(f"查询低库存书籍 - Threshold: {threshold}")
        books = await self.book_repository.find_low_stock(threshold)
        return [book_mapper.to_response(book) for book in books]

    async def _find_book(self, book_id: str) -> Book:
        book = await self.book_repository.get_by_id(book_id)
        if not book:
            raise BookNotFoundError.with_book_id(book_id)
        return book
