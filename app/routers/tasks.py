# app/routers/tasks.py
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from typing import List, Optional

from app.database import get_db
from app.models.task import TaskStatus, TaskPriority
from app.models.user import Role, User
from app.schemas.task import TaskCreate, TaskUpdate, TaskOut, normalize_priority
from app.services.integrity import IntegrityManager
from app.utils.auth import require_roles
from app.utils.errors import ValidationError

router = APIRouter()

can_read = require_roles(Role.HR, Role.AGENT)
can_write = require_roles(Role.HR, Role.AGENT)


@router.get("", response_model=List[TaskOut])
def get_all_tasks(
    assigned_to: Optional[int] = None,
    status: Optional[TaskStatus] = None,
    priority: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read),
):
    priority_filter = None
    if priority:
        try:
            priority_filter = TaskPriority(normalize_priority(priority))
        except ValueError:
            raise ValidationError("Priority must be one of Low, Medium, High")
    return IntegrityManager(db).list_tasks(assigned_to=assigned_to, status=status, priority=priority_filter)


@router.get("/assigned", response_model=List[TaskOut])
def get_assigned_tasks(
    assigned_to: Optional[int] = None,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_read),
):
    """Tasks of one team member, soonest due first"""
    if assigned_to is None:
        raise ValidationError("Team member ID is required", required=["assigned_to"])
    return IntegrityManager(db).list_tasks(assigned_to=assigned_to)


@router.get("/{task_id}", response_model=TaskOut)
def get_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(can_read)):
    return IntegrityManager(db).get_task(task_id)


@router.post("", response_model=TaskOut, status_code=status.HTTP_201_CREATED)
def create_task(task: TaskCreate, db: Session = Depends(get_db), current_user: User = Depends(can_write)):
    return IntegrityManager(db).create_task(task)


@router.patch("/{task_id}", response_model=TaskOut)
def update_task(
    task_id: int,
    task_update: TaskUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(can_write),
):
    return IntegrityManager(db).update_task(task_id, task_update)


@router.delete("/{task_id}")
def delete_task(task_id: int, db: Session = Depends(get_db), current_user: User = Depends(can_write)):
    IntegrityManager(db).delete_task(task_id)
    return {"message": "Task deleted successfully"}
