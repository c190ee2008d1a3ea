"""
书籍数据访问层
"""
from typing import Dict, List, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookmanager.models.book import Book
from bookmanager.models.enums import BookStatus
from bookmanager.models.page import Page, PageRequest
from bookmanager.repositories.pagination import paginate

SORTABLE_COLUMNS = {
    "created_at": Book.created_at,
    "updated_at": Book.updated_at,
    "title": Book.title,
    "author": Book.author,
    "price": Book.price,
    "stock_quantity": Book.stock_quantity,
    "published_at": Book.published_at,
}


class BookRepository:
    """书籍仓库类"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, book: Book) -> Book:
        """保存书籍（新增或更新），立即flush以暴露约束冲突"""
        self.session.add(book)
        await self.session.flush()
        return book

    async def get_by_id(self, book_id: str) -> Optional[Book]:
        """根据ID获取书籍"""
        return await self.session.get(Book, book_id)

    async def get_by_isbn(self, isbn: str) -> Optional[Book]:
        """根据ISBN获取书籍"""
        result = await self.session.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    async def exists_by_isbn(self, isbn: str) -> bool:
        """ISBN是否已存在"""
        result = await self.session.execute(
            select(Book.book_id).where(Book.isbn == isbn).limit(1)
        )
        return result.first() is not None

    async def delete(self, book: Book) -> None:
        """删除书籍（物理删除）"""
        await self.session.delete(book)
        await self.session.flush()

    async def find_all(self, page_request: PageRequest) -> Page[Book]:
        """分页获取全部书籍"""
        return await self._paginate(select(Book), page_request)

    async def search_by_title(self, title_keyword: str, page_request: PageRequest) -> Page[Book]:
        """根据标题搜索书籍（部分匹配）"""
        stmt = select(Book).where(Book.title.contains(title_keyword, autoescape=True))
        return await self._paginate(stmt, page_request)

    async def search_by_author(self, author_keyword: str, page_request: PageRequest) -> Page[Book]:
        """根据作者搜索书籍（部分匹配）"""
        stmt = select(Book).where(Book.author.contains(author_keyword, autoescape=True))
        return await self._paginate(stmt, page_request)

    async def search_by_title_or_author(self, keyword: str, page_request: PageRequest) -> Page[Book]:
        """标题或作者包含关键字"""
        stmt = select(Book).where(
            or_(
                Book.title.contains(keyword, autoescape=True),
                Book.author.contains(keyword, autoescape=True),
            )
        )
        return await self._paginate(stmt, page_request)

    async def find_by_category(self, category: str, page_request: PageRequest) -> Page[Book]:
        """根据分类获取书籍"""
        stmt = select(Book).where(Book.category == category)
        return await self._paginate(stmt, page_request)

    async def find_by_status(self, status: BookStatus, page_request: PageRequest) -> Page[Book]:
        """根据状态获取书籍"""
        stmt = select(Book).where(Book.status == status)
        return await self._paginate(stmt, page_request)

    async def find_by_category_and_status(
        self, category: str, status: BookStatus, page_request: PageRequest
    ) -> Page[Book]:
        """根据分类和状态获取书籍"""
        stmt = select(Book).where(and_(Book.category == category, Book.status == status))
        return await self._paginate(stmt, page_request)

    async def find_by_price_between(
        self, min_price: int, max_price: int, page_request: PageRequest
    ) -> Page[Book]:
        """价格区间查询（含边界）"""
        stmt = select(Book).where(Book.price.between(min_price, max_price))
        return await self._paginate(stmt, page_request)

    async def find_low_stock(self, threshold: int) -> List[Book]:
        """获取低库存书籍：库存 <= 阈值 且 状态为 AVAILABLE"""
        stmt = (
            select(Book)
            .where(Book.stock_quantity <= threshold, Book.status == BookStatus.AVAILABLE)
            .order_by(Book.stock_quantity.asc(), Book.book_id.asc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_by_category(self) -> Dict[Optional[str], int]:
        """按分类统计书籍数量"""
        stmt = select(Book.category, func.count(Book.book_id)).group_by(Book.category)
        result = await self.session.execute(stmt)
        return {category: count for category, count in result.all()}

    async def _paginate(self, stmt, page_request: PageRequest) -> Page[Book]:
        return await paginate(self.session, stmt, page_request, SORTABLE_COLUMNS, Book.book_id)
