# app/schemas/task.py
from pydantic import BaseModel, Field, field_validator
from datetime import date, datetime
from typing import Optional

from app.models.task import TaskStatus, TaskPriority
from app.schemas.team_member import TeamMemberBasic


def normalize_priority(value):
    """'high' and 'HIGH' both become 'High'"""
    if isinstance(value, str):
        return value.strip().capitalize()
    return value


class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    status: TaskStatus = TaskStatus.PENDING
    priority: TaskPriority = TaskPriority.MEDIUM
    assigned_to: int
    due_date: Optional[date] = None

    model_config = {
        "str_strip_whitespace": True
    }

    # null falls back to the defaults, as it does on update
    @field_validator("status", mode="before")
    @classmethod
    def default_status(cls, v):
        return TaskStatus.PENDING if v is None else v

    @field_validator("priority", mode="before")
    @classmethod
    def capitalize_priority(cls, v):
        return TaskPriority.MEDIUM if v is None else normalize_priority(v)


class TaskUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1)
    description: Optional[str] = None
    status: Optional[TaskStatus] = None
    priority: Optional[TaskPriority] = None
    assigned_to: Optional[int] = None
    due_date: Optional[date] = None

    model_config = {
        "str_strip_whitespace": True
    }

    @field_validator("priority", mode="before")
    @classmethod
    def capitalize_priority(cls, v):
        return normalize_priority(v)


class TaskOut(BaseModel):
    id: int
    title: str
    description: Optional[str] = None
    status: TaskStatus
    priority: TaskPriority
    assigned_to: int
    due_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # null when the referenced team member no longer exists
    assignee: Optional[TeamMemberBasic] = None

    model_config = {
        "from_attributes": True
    }
