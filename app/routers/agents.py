# app/routers/agents.py
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.user import Role, User
from app.schemas.agent import AgentCreate, AgentUpdate, AgentOut
from app.services.integrity import IntegrityManager
from app.utils.auth import require_roles

router = APIRouter()

can_read = require_roles(Role.HR, Role.AGENT)
can_write = require_roles(Role.HR)


@router.get("", response_model=List[AgentOut])
def get_all_agents(
    region: Optional[str] = None,
    office: Optional[str] = None,
    role: Optional[str] = None,
    active_status: Optional[bool] = None,
    skills: Optional[str] = Query(None, description="Comma-separated; matches any"),
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read),
):
    """List agents; every supplied filter must match"""
    skill_list = [skill.strip() for skill in skills.split(",") if skill.strip()] if skills else None
    return IntegrityManager(db).list_agents(
        region=region,
        office=office,
        role=role,
        active_status=active_status,
        skills=skill_list,
    )


@router.get("/{agent_id}", response_model=AgentOut)
def get_agent(agent_id: int, db: Session = Depends(get_db), current_user: User = Depends(can_read)):
    return IntegrityManager(db).get_agent(agent_id)


@router.post("", response_model=AgentOut, status_code=status.HTTP_201_CREATED)
def create_agent(agent: AgentCreate, db: Session = Depends(get_db), current_user: User = Depends(can_write)):
    return IntegrityManager(db).create_agent(agent)


@router.patch("/{agent_id}", response_model=AgentOut)
def update_agent(
    agent_id: int,
    agent_update: AgentUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_write),
):
    return IntegrityManager(db).update_agent(agent_id, agent_update)


@router.delete("/{agent_id}")
def delete_agent(agent_id: int, db: Session = Depends(get_db), current_user: User = Depends(can_write)):
    """Delete an agent that has no team members and no tasks"""
    IntegrityManager(db).delete_agent(agent_id)
    return {"message": "Agent deleted successfully"}
