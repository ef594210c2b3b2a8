from .user import UserCreate, UserLogin, UserOut
from .tokens import LoginResponse, RegisterResponse
from .agent import AgentCreate, AgentUpdate, AgentOut
from .team_member import TeamMemberCreate, TeamMemberUpdate, TeamMemberBasic, TeamMemberOut
from .task import TaskCreate, TaskUpdate, TaskOut
from .dashboard import DashboardOverview, EntityCounts, TaskCounts
