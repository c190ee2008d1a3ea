"""
会员数据访问层
"""
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookmanager.models.enums import MemberStatus
from bookmanager.models.member import Member
from bookmanager.models.page import Page, PageRequest
from bookmanager.repositories.pagination import paginate

SORTABLE_COLUMNS = {
    "created_at": Member.created_at,
    "updated_at": Member.updated_at,
    "name": Member.name,
    "email": Member.email,
}


class MemberRepository:
    """会员仓库类"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def save(self, member: Member) -> Member:
        """保存会员，立即flush以暴露约束冲突"""
        self.session.add(member)
        await self.session.flush()
        return member

    async def get_by_id(self, member_id: str) -> Optional[Member]:
        return await self.session.get(Member, member_id)

    async def get_by_email(self, email: str) -> Optional[Member]:
        result = await self.session.execute(select(Member).where(Member.email == email))
        return result.scalar_one_or_none()

    async def get_by_email_and_status(self, email: str, status: MemberStatus) -> Optional[Member]:
        result = await self.session.execute(
            select(Member).where(Member.email == email, Member.status == status)
        )
        return result.scalar_one_or_none()

    async def exists_by_email(self, email: str) -> bool:
        """邮箱是否已注册"""
        result = await self.session.execute(
            select(Member.member_id).where(Member.email == email).limit(1)
        )
        return result.first() is not None

    async def delete(self, member: Member) -> None:
        """删除会员（物理删除）"""
        await self.session.delete(member)
        await self.session.flush()

    async def find_all(self, page_request: PageRequest) -> Page[Member]:
        return await self._paginate(select(Member), page_request)

    async def search_by_name(self, name_keyword: str, page_request: PageRequest) -> Page[Member]:
        """根据姓名搜索（部分匹配）"""
        stmt = select(Member).where(Member.name.contains(name_keyword, autoescape=True))
        return await self._paginate(stmt, page_request)

    async def find_by_status(self, status: MemberStatus, page_request: PageRequest) -> Page[Member]:
        stmt = select(Member).where(Member.status == status)
        return await self._paginate(stmt, page_request)

    async def find_by_created_at_between(
        self, start: datetime, end: datetime, page_request: PageRequest
    ) -> Page[Member]:
        """注册时间区间查询（含边界）"""
        stmt = select(Member).where(Member.created_at.between(start, end))
        return await self._paginate(stmt, page_request)

    async def count_by_status(self, status: MemberStatus) -> int:
        result = await self.session.execute(
            select(func.count(Member.member_id)).where(Member.status == status)
        )
        return result.scalar_one()

    async def count_grouped_by_status(self) -> Dict[MemberStatus, int]:
        """按状态统计会员数量"""
        stmt = select(Member.status, func.count(Member.member_id)).group_by(Member.status)
        result = await self.session.execute(stmt)
        return {status: count for status, count in result.all()}

    async def _paginate(self, stmt, page_request: PageRequest) -> Page[Member]:
        return await paginate(self.session, stmt, page_request, SORTABLE_COLUMNS, Member.member_id)
