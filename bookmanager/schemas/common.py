"""
通用响应结构
"""
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from bookmanager.models.page import Page

T = TypeVar("T")

DEFAULT_SUCCESS_MESSAGE = "请求处理成功"


class CamelModel(BaseModel):
    """JSON字段使用camelCase，Python属性使用snake_case"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class PageResponse(CamelModel, Generic[T]):
    """分页响应"""

    content: List[T]
    page: int = Field(description="当前页（从1开始）")
    size: int
    total_elements: int
    total_pages: int
    first: bool
    last: bool

    @classmethod
    def from_page(cls, page: Page, mapper: Callable[[Any], T]) -> "PageResponse[T]":
        return cls(
            content=[mapper(item) for item in page.content],
            page=page.page,
            size=page.size,
            total_elements=page.total_elements,
            total_pages=page.total_pages,
            first=page.is_first,
            last=page.is_last,
        )


class ApiResponse(CamelModel):
    """
    统一响应包装
    {success, message, data?, errorCode?, timestamp}，值为null的顶层字段不输出
    """

    success: bool
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def ok(cls, data: Any = None, message: str = DEFAULT_SUCCESS_MESSAGE) -> "ApiResponse":
        """成功响应"""
        return cls(success=True, message=message, data=data)

    @classmethod
    def fail(cls, message: str, error_code: Optional[str] = None, data: Any = None) -> "ApiResponse":
        """失败响应"""
        return cls(success=False, message=message, error_code=error_code, data=data)

    def to_dict(self) -> Dict[str, Any]:
        """序列化为JSON兼容的dict"""
        payload = self.model_dump(mode="json", by_alias=True)
        return {key: value for key, value in payload.items() if value is not None}
