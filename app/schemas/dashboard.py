from pydantic import BaseModel
from typing import Dict


class EntityCounts(BaseModel):
    total: int
    active: int


class TaskCounts(BaseModel):
    total: int
    overdue: int
    by_status: Dict[str, int]
    by_priority: Dict[str, int]


class DashboardOverview(BaseModel):
    agents: EntityCounts
    team_members: EntityCounts
    tasks: TaskCounts
