"""
Team member endpoints
"""

from typing import List

from fastapi import APIRouter, Depends

from portfolio_cms.api.deps import get_team_member_store, require_admin
from portfolio_cms.core.exceptions import RecordNotFound
from portfolio_cms.schemas.common import APIResponse
from portfolio_cms.schemas.team_member import TeamMember, TeamMemberCreate, TeamMemberUpdate
from portfolio_cms.schemas.user import TokenClaims
from portfolio_cms.services.team_member_store import TeamMemberStore

router = APIRouter()


@router.get("/", response_model=APIResponse[List[TeamMember]])
def list_team_members(store: TeamMemberStore = Depends(get_team_member_store)):
    """Active members only; this is the public team page feed"""
    return APIResponse[List[TeamMember]](success=True, data=store.list(active_only=True))


@router.post("/", response_model=APIResponse[TeamMember])
def create_team_member(
    member_data: TeamMemberCreate,
    store: TeamMemberStore = Depends(get_team_member_store),
    _admin: TokenClaims = Depends(require_admin),
):
    member = store.create(member_data)
    return APIResponse[TeamMember](success=True, data=member, message="Team member created successfully")


@router.put("/{member_id}", response_model=APIResponse[TeamMember])
def update_team_member(
    member_id: str,
    member_data: TeamMemberUpdate,
    store: TeamMemberStore = Depends(get_team_member_store),
    _admin: TokenClaims = Depends(require_admin),
):
    member = store.update(member_id, member_data.model_dump(exclude_unset=True))
    if not member:
        raise RecordNotFound("Team member", member_id)
    return APIResponse[TeamMember](success=True, data=member, message="Team member updated successfully")


@router.delete("/{member_id}")
def delete_team_member(
    member_id: str,
    store: TeamMemberStore = Depends(get_team_member_store),
    _admin: TokenClaims = Depends(require_admin),
):
    if not store.delete(member_id):
        raise RecordNotFound("Team member", member_id)
    return {"success": True, "message": "Team member deleted successfully"}
