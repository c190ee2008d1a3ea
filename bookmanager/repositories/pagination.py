"""
分页查询辅助
"""
import re
from typing import Dict

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from bookmanager.exceptions import InvalidArgumentError
from bookmanager.models.page import Page, PageRequest

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """createdAt -> created_at"""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def resolve_order_by(page_request: PageRequest, sortable_columns: Dict[str, object], tie_breaker):
    """根据分页请求生成排序子句，排序字段必须在白名单内"""
    key = to_snake_case(page_request.sort)
    column = sortable_columns.get(key)
    if column is None:
        raise InvalidArgumentError(
            f"Unsupported sort field: {page_request.sort} "
            f"(allowed: {', '.join(sorted(sortable_columns))})"
        )
    if page_request.direction == "asc":
        return [column.asc(), tie_breaker.asc()]
    return [column.desc(), tie_breaker.desc()]


async def paginate(
    session: AsyncSession,
    stmt: Select,
    page_request: PageRequest,
    sortable_columns: Dict[str, object],
    tie_breaker,
) -> Page:
    """执行分页查询：先统计总数，再取当前页"""
    count_stmt = select(func.count()).select_from(stmt.order_by(None).subquery())
    total = (await session.execute(count_stmt)).scalar_one()

    page_stmt = (
        stmt.order_by(*resolve_order_by(page_request, sortable_columns, tie_breaker))
        .offset(page_request.offset)
        .limit(page_request.size)
    )
    result = await session.execute(page_stmt)
    return Page(
        content=list(result.scalars().all()),
        page=page_request.page,
        size=page_request.size,
        total_elements=total,
    )
