"""
会员管理路由
"""
import logging
from datetime import datetime

from fastapi import APIRouter, Depends, Query, status

from bookmanager.dependencies import get_member_service, get_page_request
from bookmanager.models.enums import MemberStatus
from bookmanager.models.page import PageRequest
from bookmanager.schemas.common import ApiResponse
from bookmanager.schemas.member import MemberCreateRequest, MemberUpdateRequest, PasswordChangeRequest
from bookmanager.services.member_service import MemberService

logger = logging.getLogger(__name__)

member_router = APIRouter(prefix="/api/members", tags=["members"])


@member_router.post("", status_code=status.HTTP_201_CREATED)
async def register_member(request: MemberCreateRequest, service: MemberService = Depends(get_member_service)):
    """会员注册"""
    logger.info(f"会员注册API - Email: {request.email}")
    member = await service.register_member(request)
    return ApiResponse.ok(member, "会员注册成功").to_dict()


@member_router.get("")
async def get_members(
    page_request: PageRequest = Depends(get_page_request),
    service: MemberService = Depends(get_member_service),
):
    return ApiResponse.ok(await service.get_all_members(page_request)).to_dict()


@member_router.get("/search")
async def search_members_by_name(
    name: str = Query(..., min_length=1),
    page_request: PageRequest = Depends(get_page_request),
    service: MemberService = Depends(get_member_service),
):
    """按姓名搜索会员"""
    return ApiResponse.ok(await service.search_members_by_name(name, page_request)).to_dict()


@member_router.get("/joined")
async def get_members_joined_between(
    start: datetime = Query(...),
    end: datetime = Query(...),
    page_request: PageRequest = Depends(get_page_request),
    service: MemberService = Depends(get_member_service),
):
    """按注册时间区间查询会员"""
    page = await service.get_members_joined_between(start, end, page_request)
    return ApiResponse.ok(page).to_dict()


@member_router.get("/count/active")
async def count_active_members(service: MemberService = Depends(get_member_service)):
    """活跃会员数量"""
    return ApiResponse.ok(await service.count_active_members()).to_dict()


@member_router.get("/stats/status")
async def count_members_by_status(service: MemberService = Depends(get_member_service)):
    """按状态统计会员数量"""
    return ApiResponse.ok(await service.count_members_by_status()).to_dict()


@member_router.get("/email/{email}")
async def get_member_by_email(email: str, service: MemberService = Depends(get_member_service)):
    return ApiResponse.ok(await service.get_member_by_email(email)).to_dict()


@member_router.get("/status/{member_status}")
async def get_members_by_status(
    member_status: MemberStatus,
    page_request: PageRequest = Depends(get_page_request),
    service: MemberService = Depends(get_member_service),
):
    return ApiResponse.ok(await service.get_members_by_status(member_status, page_request)).to_dict()


@member_router.get("/{member_id}")
async def get_member(member_id: str, service: MemberService = Depends(get_member_service)):
    return ApiResponse.ok(await service.get_member_by_id(member_id)).to_dict()


@member_router.patch("/{member_id}")
async def update_member(
    member_id: str,
    request: MemberUpdateRequest,
    service: MemberService = Depends(get_member_service),
):
    """修改会员资料"""
    member = await service.update_member(member_id, request)
    return ApiResponse.ok(member, "会员资料已更新").to_dict()


@member_router.patch("/{member_id}/password")
async def change_password(
    member_id: str,
    request: PasswordChangeRequest,
    service: MemberService = Depends(get_member_service),
):
    """修改密码"""
    member = await service.change_password(member_id, request)
    return ApiResponse.ok(member, "密码已修改").to_dict()


@member_router.patch("/{member_id}/withdraw")
async def withdraw_member(member_id: str, service: MemberService = Depends(get_member_service)):
    """会员注销（软删除）"""
    await service.withdraw_member(member_id)
    return ApiResponse.ok(message="会员已注销").to_dict()


@member_router.patch("/{member_id}/activate")
async def activate_member(member_id: str, service: MemberService = Depends(get_member_service)):
    member = await service.activate_member(member_id)
    return ApiResponse.ok(member, "会员已启用").to_dict()


@member_router.patch("/{member_id}/deactivate")
async def deactivate_member(member_id: str, service: MemberService = Depends(get_member_service)):
    member = await service.deactivate_member(member_id)
    return ApiResponse.ok(member, "会员已停用").to_dict()


@member_router.delete("/{member_id}")
async def delete_member(member_id: str, service: MemberService = Depends(get_member_service)):
    """彻底删除会员"""
    await service.delete_member(member_id)
    return ApiResponse.ok(message="会员已彻底删除").to_dict()
