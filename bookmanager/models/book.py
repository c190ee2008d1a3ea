"""
书籍模型
库存与状态只能通过实体方法修改，库存联动规则见 resolve_stock_status
"""
from datetime import datetime
from typing import Optional

from sqlalchemy import CheckConstraint, Column, Enum, Integer, String, Text

from bookmanager.database import Base
from bookmanager.exceptions import InsufficientStockError, InvalidArgumentError
from bookmanager.models.base import TimestampMixin, UTCDateTime, as_utc
from bookmanager.models.enums import BookStatus


def resolve_stock_status(status: BookStatus, previous_quantity: int, new_quantity: int) -> BookStatus:
    """
    库存变化后的状态

    - 库存减少到0：OUT_OF_STOCK
    - 库存从 OUT_OF_STOCK 增加到大于0：AVAILABLE
    - 其余情况保持原状态

    手动修改状态（Book.change_status）不经过此规则。
    直接调用时库存未减少（如 0 -> 0）不会改为 OUT_OF_STOCK。
    """
    if new_quantity == 0 and new_quantity < previous_quantity:
        return BookStatus.OUT_OF_STOCK
    if new_quantity > previous_quantity and status == BookStatus.OUT_OF_STOCK:
        return BookStatus.AVAILABLE
    return status


class Book(TimestampMixin, Base):
    """书籍模型"""

    __tablename__ = "book"
    __table_args__ = (
        CheckConstraint("stock_quantity >= 0", name="ck_book_stock_non_negative"),
    )

    book_id = Column(String(36), primary_key=True)
    title = Column(String(200), nullable=False, index=True)
    author = Column(String(100), nullable=False, index=True)
    isbn = Column(String(20), nullable=False, unique=True, index=True)  # 唯一业务标识
    publisher = Column(String(100))
    price = Column(Integer, nullable=False)
    stock_quantity = Column(Integer, nullable=False, default=0)
    description = Column(Text)
    category = Column(String(50), index=True)
    status = Column(
        Enum(BookStatus, name="book_status", native_enum=False, length=20),
        nullable=False,
        default=BookStatus.AVAILABLE,
    )
    published_at = Column(UTCDateTime)

    @classmethod
    def create(
        cls,
        book_id: str,
        title: str,
        author: str,
        isbn: str,
        price: int,
        stock_quantity: Optional[int] = None,
        status: Optional[BookStatus] = None,
        publisher: Optional[str] = None,
        description: Optional[str] = None,
        category: Optional[str] = None,
        published_at: Optional[datetime] = None,
    ) -> "Book":
        """创建书籍，库存默认0，状态默认 AVAILABLE"""
        stock_quantity = stock_quantity if stock_quantity is not None else 0
        if stock_quantity < 0:
            raise InvalidArgumentError("Stock quantity must not be negative")
        return cls(
            book_id=book_id,
            title=title,
            author=author,
            isbn=isbn,
            price=price,
            stock_quantity=stock_quantity,
            status=status if status is not None else BookStatus.AVAILABLE,
            publisher=publisher,
            description=description,
            category=category,
            published_at=as_utc(published_at) if published_at is not None else None,
        )

    def update_info(
        self,
        title: str,
        author: str,
        publisher: Optional[str],
        price: int,
        description: Optional[str],
        category: Optional[str],
    ) -> None:
        """更新基本信息（ISBN、库存、状态、出版时间不可通过此方法修改）"""
        self.title = title
        self.author = author
        self.publisher = publisher
        self.price = price
        self.description = description
        self.category = category

    def add_stock(self, quantity: int) -> None:
        """增加库存"""
        if quantity <= 0:
            raise InvalidArgumentError("Quantity to add must be positive")
        previous = self.stock_quantity
        self.stock_quantity = previous + quantity
        self.status = resolve_stock_status(self.status, previous, self.stock_quantity)

    def remove_stock(self, quantity: int) -> None:
        """减少库存，库存不足时不做任何修改"""
        if quantity <= 0:
            raise InvalidArgumentError("Quantity to remove must be positive")
        previous = self.stock_quantity
        rest = previous - quantity
        if rest < 0:
            raise InsufficientStockError(quantity, previous)
        self.stock_quantity = rest
        self.status = resolve_stock_status(self.status, previous, rest)

    def change_status(self, status: BookStatus) -> None:
        """手动修改状态，不考虑当前库存"""
        self.status = status

    def __repr__(self):
        return f"Book(book_id='{self.book_id}', isbn='{self.isbn}', title='{self.title}')"
