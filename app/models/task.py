# app/models/task.py
from sqlalchemy import Column, Integer, String, DateTime, Date, ForeignKey, Enum, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base
import enum


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, enum.Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


def _enum_values(enum_cls):
    return [member.value for member in enum_cls]


class Task(Base):
    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)

    assigned_to = Column(Integer, ForeignKey("team_members.id", ondelete="RESTRICT"), nullable=False, index=True)

    # Stored by value ("in_progress", "High") so the columns read like the API
    status = Column(
        Enum(TaskStatus, name="task_status", values_callable=_enum_values, validate_strings=True),
        default=TaskStatus.PENDING,
        nullable=False,
    )
    priority = Column(
        Enum(TaskPriority, name="task_priority", values_callable=_enum_values, validate_strings=True),
        default=TaskPriority.MEDIUM,
        nullable=False,
    )

    due_date = Column(Date, nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    assignee = relationship("TeamMember", back_populates="tasks")
