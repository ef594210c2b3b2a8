from .user import User, Role
from .agent import Agent
from .team_member import TeamMember
from .task import Task, TaskStatus, TaskPriority
