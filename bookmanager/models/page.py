"""
分页模型
"""
from dataclasses import dataclass
from typing import Callable, Generic, List, TypeVar

from bookmanager.exceptions import InvalidArgumentError

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class PageRequest:
    """分页请求（页码从1开始）"""

    page: int = 1
    size: int = 10
    sort: str = "created_at"
    direction: str = "desc"

    def __post_init__(self):
        if self.page < 1:
            raise InvalidArgumentError("page must be >= 1")
        if self.size < 1:
            raise InvalidArgumentError("size must be >= 1")
        self.direction = self.direction.lower()
        if self.direction not in ("asc", "desc"):
            raise InvalidArgumentError("direction must be 'asc' or 'desc'")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size


@dataclass
class Page(Generic[T]):
    """分页结果"""

    content: List[T]
    page: int
    size: int
    total_elements: int

    @property
    def total_pages(self) -> int:
        return (self.total_elements + self.size - 1) // self.size if self.size else 0

    @property
    def is_first(self) -> bool:
        return self.page == 1

    @property
    def is_last(self) -> bool:
        return self.page >= self.total_pages

    def map(self, func: Callable[[T], R]) -> "Page[R]":
        """转换页内元素，分页信息不变"""
        return Page(
            content=[func(item) for item in self.content],
            page=self.page,
            size=self.size,
            total_elements=self.total_elements,
        )
