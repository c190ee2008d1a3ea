"""
会员业务服务层
"""
import logging
from datetime import datetime
from typing import Dict, Optional

from sqlalchemy.exc import IntegrityError

from bookmanager.exceptions import DuplicateResourceError, InvalidArgumentError, MemberNotFoundError
from bookmanager.mappers import member_mapper
from bookmanager.models.base import as_utc
from bookmanager.models.enums import MemberStatus
from bookmanager.models.member import Member
from bookmanager.models.page import PageRequest
from bookmanager.repositories.member_repository import MemberRepository
from bookmanager.schemas.common import PageResponse
from bookmanager.schemas.member import (
    MemberCreateRequest,
    MemberResponse,
    MemberUpdateRequest,
    PasswordChangeRequest,
)
from bookmanager.utils.id_generator import TimeOrderedIdGenerator, generate_id
from bookmanager.utils.password import PasswordEncoder, PlainTextPasswordEncoder

logger = logging.getLogger(__name__)


class MemberService:
    """会员服务类"""

    def __init__(
        self,
        member_repository: MemberRepository,
        password_encoder: Optional[PasswordEncoder] = None,
        id_generator: Optional[TimeOrderedIdGenerator] = None,
    ):
        self.member_repository = member_repository
        self.password_encoder = password_encoder or PlainTextPasswordEncoder()
        self._next_id = id_generator.next if id_generator else generate_id

    async def register_member(self, request: MemberCreateRequest) -> MemberResponse:
        """会员注册"""
        email = str(request.email)
        logger.info(f"会员注册 - Email: {email}")

        # 检查邮箱是否已注册
        if await self.member_repository.exists_by_email(email):
            raise DuplicateResourceError.with_email(email)

        encoded_password = self.password_encoder.encode(request.password)
        member = member_mapper.to_entity(request, self._next_id(), encoded_password)
        try:
            saved = await self.member_repository.save(member)
        except IntegrityError as e:
            logger.warning(f"邮箱唯一约束冲突: {email}")
            raise DuplicateResourceError.with_email(email) from e

        logger.info(f"会员注册完成 - ID: {saved.member_id}, Email: {saved.email}")
        return member_mapper.to_response(saved)

    async def get_member_by_id(self, member_id: str) -> MemberResponse:
        logger.info(f"查询会员 - ID: {member_id}")
        return member_mapper.to_response(await self._find_member(member_id))

    async def get_member_by_email(self, email: str) -> MemberResponse:
        logger.info(f"查询会员 - Email: {email}")
        member = await self.member_repository.get_by_email(email)
        if not member:
            raise MemberNotFoundError.with_email(email)
        return member_mapper.to_response(member)

    async def exists_by_email(self, email: str) -> bool:
        return await self.member_repository.exists_by_email(email)

    async def get_all_members(self, page_request: PageRequest) -> PageResponse[MemberResponse]:
        logger.info(f"查询会员列表 - Page: {page_request.page}, Size: {page_request.size}")
        page = await self.member_repository.find_all(page_request)
        return PageResponse.from_page(page, member_mapper.to_response)

    async def search_members_by_name(self, name: str, page_request: PageRequest) -> PageResponse[MemberResponse]:
        logger.info(f"按姓名搜索会员 - Name: {name}")
        page = await self.member_repository.search_by_name(name, page_request)
        return PageResponse.from_page(page, member_mapper.to_response)

    async def get_members_by_status(
        self, status: MemberStatus, page_request: PageRequest
    ) -> PageResponse[MemberResponse]:
        logger.info(f"按状态查询会员 - Status: {status.value}")
        page = await self.member_repository.find_by_status(status, page_request)
        return PageResponse.from_page(page, member_mapper.to_response)

    async def get_members_joined_between(
        self, start: datetime, end: datetime, page_request: PageRequest
    ) -> PageResponse[MemberResponse]:
        """按注册时间区间查询"""
        start, end = as_utc(start), as_utc(end)
        logger.info(f"按注册时间查询会员 - {start.isoformat()} ~ {end.isoformat()}")
        if end < start:
            raise InvalidArgumentError("End of range must not be before start")
        page = await self.member_repository.find_by_created_at_between(start, end, page_request)
        return PageResponse.from_page(page, member_mapper.to_response)

    async def update_member(self, member_id: str, request: MemberUpdateRequest) -> MemberResponse:
        """修改会员资料（姓名、电话）"""
        logger.info(f"修改会员资料 - ID: {member_id}")
        member = await self._find_member(member_id)
        member_mapper.update_entity_from_request(request, member)
        await self.member_repository.save(member)
        logger.info(f"修改会员资料完成 - ID: {member_id}")
        return member_mapper.to_response(member)

    async def change_password(self, member_id: str, request: PasswordChangeRequest) -> MemberResponse:
        """
        修改密码
        当前密码暂不校验，等接入凭证校验组件后再启用
        """
        logger.info(f"修改密码 - ID: {member_id}")
        member = await self._find_member(member_id)

        if request.new_password != request.password_confirm:
            raise InvalidArgumentError("New password and confirmation do not match")

        member.change_password(self.password_encoder.encode(request.new_password))
        await self.member_repository.save(member)

        logger.info(f"修改密码完成 - ID: {member_id}")
        return member_mapper.to_response(member)

    async def withdraw_member(self, member_id: str) -> None:
        """会员注销（软删除）"""
        logger.info(f"会员注销 - ID: {member_id}")
        member = await self._find_member(member_id)
        member.withdraw()
        await self.member_repository.save(member)
        logger.info(f"会员注销完成 - ID: {member_id}")

    async def activate_member(self, member_id: str) -> MemberResponse:
        logger.info(f"启用会员 - ID: {member_id}")
        member = await self._find_member(member_id)
        member.activate()
        await self.member_repository.save(member)
        return member_mapper.to_response(member)

    async def deactivate_member(self, member_id: str) -> MemberResponse:
        logger.info(f"停用会员 - ID: {member_id}")
        member = await self._find_member(member_id)
        member.deactivate()
        await self.member_repository.save(member)
        return member_mapper.to_response(member)

    async def delete_member(self, member_id: str) -> None:
        """彻底删除会员（物理删除）"""
        logger.info(f"删除会员 - ID: {member_id}")
        member = await self._find_member(member_id)
        await self.member_repository.delete(member)
        logger.info(f"删除会员完成 - ID: {member_id}")

    async def count_active_members(self) -> int:
        return await self.member_repository.count_by_status(MemberStatus.ACTIVE)

    async def count_members_by_status(self) -> Dict[str, int]:
        """各状态会员数量，没有会员的状态计为0"""
        counts = await self.member_repository.count_grouped_by_status()
        return {status.value: counts.get(status, 0) for status in MemberStatus}

    async def _find_member(self, member_id: str) -> Member:
        member = await self.member_repository.get_by_id(member_id)
        if not member:
            raise MemberNotFoundError.with_member_id(member_id)
        return member
