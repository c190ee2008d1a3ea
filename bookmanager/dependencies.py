"""
FastAPI依赖注入：会话、仓库、服务、分页参数
会话依赖使用 function 作用域，事务在响应发送前提交
"""
from typing import Optional

from fastapi import Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from bookmanager.config import get_settings
from bookmanager.database import get_session
from bookmanager.models.page import PageRequest
from bookmanager.repositories.book_repository import BookRepository
from bookmanager.repositories.member_repository import MemberRepository
from bookmanager.services.book_service import BookService
from bookmanager.services.member_service import MemberService


def get_book_service(
    session: AsyncSession = Depends(get_session, scope="function"),
) -> BookService:
    return BookService(BookRepository(session))


def get_member_service(
    session: AsyncSession = Depends(get_session, scope="function"),
) -> MemberService:
    return MemberService(MemberRepository(session))


def get_page_request(
    page: int = Query(1, ge=1, description="页码，从1开始"),
    size: Optional[int] = Query(None, ge=1, description="每页条数"),
    sort: str = Query("createdAt", description="排序字段"),
    direction: str = Query("desc", description="排序方向 asc|desc"),
) -> PageRequest:
    """分页参数，size 超过上限时按上限处理"""
    settings = get_settings()
    size = min(size or settings.default_page_size, settings.max_page_size)
    return PageRequest(page=page, size=size, sort=sort, direction=direction)
