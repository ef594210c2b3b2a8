# app/routers/dashboard.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import func
from datetime import date

from app.database import get_db
from app.models import Agent, TeamMember, Task, TaskStatus, TaskPriority
from app.models.user import Role, User
from app.schemas.dashboard import DashboardOverview
from app.utils.auth import require_roles

router = APIRouter()


@router.get("/overview", response_model=DashboardOverview)
def get_dashboard_overview(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(Role.HR, Role.AGENT)),
):
    """Headline counts for agents, team members and tasks"""

    total_agents = db.query(Agent).count()
    active_agents = db.query(Agent).filter(Agent.active_status.is_(True)).count()

    total_members = db.query(TeamMember).count()
    active_members = db.query(TeamMember).filter(TeamMember.active_status.is_(True)).count()

    # Every enum value is reported, including zero counts
    by_status = {task_status.value: 0 for task_status in TaskStatus}
    for task_status, count in db.query(Task.status, func.count(Task.id)).group_by(Task.status).all():
        by_status[TaskStatus(task_status).value] = count

    by_priority = {priority.value: 0 for priority in TaskPriority}
    for priority, count in db.query(Task.priority, func.count(Task.id)).group_by(Task.priority).all():
        by_priority[TaskPriority(priority).value] = count

    # Past due and not completed
    overdue_tasks = db.query(Task).filter(
        Task.due_date < date.today(),
        Task.status != TaskStatus.COMPLETED,
    ).count()

    return {
        "agents": {"total": total_agents, "active": active_agents},
        "team_members": {"total": total_members, "active": active_members},
        "tasks": {
            "total": sum(by_status.values()),
            "overdue": overdue_tasks,
            "by_status": by_status,
            "by_priority": by_priority,
        },
    }
