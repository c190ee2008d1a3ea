"""
会员 实体 <-> 请求/响应 转换
"""
from bookmanager.models.member import Member
from bookmanager.schemas.member import MemberCreateRequest, MemberResponse, MemberUpdateRequest


def to_entity(request: MemberCreateRequest, member_id: str, encoded_password: str) -> Member:
    """注册请求 -> 实体，未指定状态时为 ACTIVE"""
    return Member.register(
        member_id=member_id,
        email=str(request.email),
        password=encoded_password,
        name=request.name,
        phone=request.phone,
        status=request.status,
    )


def to_response(member: Member) -> MemberResponse:
    return MemberResponse(
        member_id=member.member_id,
        email=member.email,
        name=member.name,
        phone=member.phone,
        status=member.status,
        created_at=member.created_at,
        updated_at=member.updated_at,
    )


def update_entity_from_request(request: MemberUpdateRequest, member: Member) -> None:
    member.update_profile(name=request.name, phone=request.phone)
