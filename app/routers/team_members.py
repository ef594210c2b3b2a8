# app/routers/team_members.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.user import Role, User
from app.schemas.team_member import TeamMemberCreate, TeamMemberUpdate, TeamMemberOut
from app.services.integrity import IntegrityManager
from app.utils.auth import require_roles
from app.utils.errors import ValidationError

router = APIRouter()

can_read = require_roles(Role.HR, Role.AGENT)
can_write = require_roles(Role.HR, Role.AGENT)


@router.get("", response_model=List[TeamMemberOut])
def get_all_team_members(
    agent_id: Optional[int] = None,
    role: Optional[str] = None,
    active_status: Optional[bool] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read),
):
    return IntegrityManager(db).list_team_members(agent_id=agent_id, role=role, active_status=active_status)


@router.get("/by-agent", response_model=List[TeamMemberOut])
def get_team_members_by_agent(
    agent_id: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read),
):
    """Team members reporting to one agent; agent_id is mandatory here"""
    if agent_id is None:
        raise ValidationError("Agent ID is required", required=["agent_id"])
    return IntegrityManager(db).list_team_members(agent_id=agent_id)


@router.get("/{member_id}", response_model=TeamMemberOut)
def get_team_member(member_id: int, db: Session = Depends(get_db), current_user: User = Depends(can_read)):
    return IntegrityManager(db).get_team_member(member_id)


@router.post("", response_model=TeamMemberOut, status_code=status.HTTP_201_CREATED)
def create_team_member(
    member: TeamMemberCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_write),
):
    return IntegrityManager(db).create_team_member(member)


@router.patch("/{member_id}", response_model=TeamMemberOut)
def update_team_member(
    member_id: int,
    member_update: TeamMemberUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_write),
):
    return IntegrityManager(db).update_team_member(member_id, member_update)


@router.delete("/{member_id}")
def delete_team_member(member_id: int, db: Session = Depends(get_db), current_user: User = Depends(can_write)):
    IntegrityManager(db).delete_team_member(member_id)
    return {"message": "Team member deleted successfully"}
