# app/services/integrity.py
from contextlib import contextmanager
from typing import List, Optional
import logging

from pydantic import BaseModel
from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.models import Agent, TeamMember, Task
from app.schemas import (
    AgentCreate, AgentUpdate,
    TeamMemberCreate, TeamMemberUpdate,
    TaskCreate, TaskUpdate,
)
from app.utils.errors import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def coalesce_changes(update: BaseModel) -> dict:
    """Fields the caller actually supplied; null means keep the stored value"""
    return {
        field: value
        for field, value in update.model_dump(exclude_unset=True).items()
        if value is not None
    }


class IntegrityManager:
    """Create, update, delete and list agents, team members and tasks.

    Agent -> TeamMember -> Task references are checked here before every
    write. Each mutation runs in one transaction: the existence and
    dependent checks see the same snapshot as the write that follows, and
    parent rows are locked (FOR UPDATE on PostgreSQL) while children are
    counted. The ON DELETE RESTRICT foreign keys turn any race the locks
    miss into a ConflictError at commit.
    """

    def __init__(self, db: Session):
        self.db = db

    @contextmanager
    def _transaction(self, conflict_message: str):
        try:
            yield
            self.db.commit()
        except IntegrityError as exc:
            self.db.rollback()
            logger.warning(f"Store rejected write: {exc.orig}")
            raise ConflictError(conflict_message) from exc
        except Exception:
            self.db.rollback()
            raise

    # Agents

    def get_agent(self, agent_id: int) -> Agent:
        agent = self.db.query(Agent).filter(Agent.id == agent_id).first()
        if agent is None:
            raise NotFoundError("Agent not found")
        return agent

    def list_agents(
        self,
        region: Optional[str] = None,
        office: Optional[str] = None,
        role: Optional[str] = None,
        active_status: Optional[bool] = None,
        skills: Optional[List[str]] = None,
    ) -> List[Agent]:
        query = self.db.query(Agent)
        if region:
            query = query.filter(Agent.region == region)
        if office:
            query = query.filter(Agent.office == office)
        if role:
            query = query.filter(Agent.role == role)
        if active_status is not None:
            query = query.filter(Agent.active_status == active_status)

        agents = query.order_by(Agent.name, Agent.id).all()

        # skills is a JSON list, so overlap is checked here rather than in SQL
        if skills:
            wanted = set(skills)
            agents = [agent for agent in agents if wanted.intersection(agent.skills or [])]
        return agents

    def create_agent(self, fields: AgentCreate) -> Agent:
        agent = Agent(
            name=fields.name,
            role=fields.role,
            office=fields.office,
            region=fields.region,
            skills=list(fields.skills or []),
            active_status=True if fields.active_status is None else fields.active_status,
        )
        with self._transaction("Agent could not be created"):
            self.db.add(agent)
        self.db.refresh(agent)
        logger.info(f"Agent {agent.id} created")
        return agent

    def update_agent(self, agent_id: int, fields: AgentUpdate) -> Agent:
        changes = coalesce_changes(fields)
        if not changes:
            raise ValidationError("No fields to update")

        with self._transaction("Agent could not be updated"):
            agent = self.get_agent(agent_id)
            for field, value in changes.items():
                setattr(agent, field, value)
        self.db.refresh(agent)
        logger.info(f"Agent {agent_id} updated: {sorted(changes)}")
        return agent

    def delete_agent(self, agent_id: int) -> None:
        with self._transaction("Cannot delete agent: agent has associated team members"):
            agent = self.db.query(Agent).filter(Agent.id == agent_id).with_for_update().first()
            if agent is None:
                raise NotFoundError("Agent not found")

            member_count = self.db.query(func.count(TeamMember.id)).filter(
                TeamMember.agent_id == agent_id
            ).scalar()
            if member_count:
                logger.warning(f"Refusing to delete agent {agent_id}: {member_count} team members")
                raise ConflictError("Cannot delete agent: agent has associated team members")

            task_count = self.db.query(func.count(Task.id)).join(
                TeamMember, Task.assigned_to == TeamMember.id
            ).filter(TeamMember.agent_id == agent_id).scalar()
            if task_count:
                logger.warning(f"Refusing to delete agent {agent_id}: {task_count} tasks")
                raise ConflictError("Cannot delete agent: agent has associated tasks")

            self.db.delete(agent)
        logger.info(f"Agent {agent_id} deleted")

    # Team members

    def _require_agent(self, agent_id: int) -> Agent:
        # FOR KEY SHARE keeps the agent from being deleted until we commit
        agent = self.db.query(Agent).filter(Agent.id == agent_id).with_for_update(
            read=True, key_share=True
        ).first()
        if agent is None:
            raise ValidationError("Agent does not exist")
        return agent

    def get_team_member(self, member_id: int) -> TeamMember:
        member = self.db.query(TeamMember).filter(TeamMember.id == member_id).first()
        if member is None:
            raise NotFoundError("Team member not found")
        return member

    def list_team_members(
        self,
        agent_id: Optional[int] = None,
        role: Optional[str] = None,
        active_status: Optional[bool] = None,
    ) -> List[TeamMember]:
        query = self.db.query(TeamMember)
        if agent_id is not None:
            query = query.filter(TeamMember.agent_id == agent_id)
        if role:
            query = query.filter(TeamMember.role == role)
        if active_status is not None:
            query = query.filter(TeamMember.active_status == active_status)
        return query.order_by(TeamMember.name, TeamMember.id).all()

    def create_team_member(self, fields: TeamMemberCreate) -> TeamMember:
        member = TeamMember(
            name=fields.name,
            role=fields.role,
            agent_id=fields.agent_id,
            active_status=True if fields.active_status is None else fields.active_status,
        )
        with self._transaction("Agent does not exist"):
            self._require_agent(fields.agent_id)
            self.db.add(member)
        self.db.refresh(member)
        logger.info(f"Team member {member.id} created for agent {member.agent_id}")
        return member

    def update_team_member(self, member_id: int, fields: TeamMemberUpdate) -> TeamMember:
        changes = coalesce_changes(fields)
        if not changes:
            raise ValidationError("No fields to update")

        with self._transaction("Agent does not exist"):
            member = self.get_team_member(member_id)
            if "agent_id" in changes and changes["agent_id"] != member.agent_id:
                self._require_agent(changes["agent_id"])
            for field, value in changes.items():
                setattr(member, field, value)
        self.db.refresh(member)
        logger.info(f"Team member {member_id} updated: {sorted(changes)}")
        return member

    def delete_team_member(self, member_id: int) -> None:
        with self._transaction("Cannot delete team member: team member has associated tasks"):
            member = self.db.query(TeamMember).filter(
                TeamMember.id == member_id
            ).with_for_update().first()
            if member is None:
                raise NotFoundError("Team member not found")

            task_count = self.db.query(func.count(Task.id)).filter(
                Task.assigned_to == member_id
            ).scalar()
            if task_count:
                logger.warning(f"Refusing to delete team member {member_id}: {task_count} tasks")
                raise ConflictError("Cannot delete team member: team member has associated tasks")

            self.db.delete(member)
        logger.info(f"Team member {member_id} deleted")

    # Tasks

    def _require_team_member(self, member_id: int) -> TeamMember:
        member = self.db.query(TeamMember).filter(TeamMember.id == member_id).with_for_update(
            read=True, key_share=True
        ).first()
        if member is None:
            raise ValidationError("Team member does not exist")
        return member

    def get_task(self, task_id: int) -> Task:
        task = self.db.query(Task).options(joinedload(Task.assignee)).filter(Task.id == task_id).first()
        if task is None:
            raise NotFoundError("Task not found")
        return task

    def list_tasks(
        self,
        assigned_to: Optional[int] = None,
        status: Optional[str] = None,
        priority: Optional[str] = None,
    ) -> List[Task]:
        query = self.db.query(Task).options(joinedload(Task.assignee))
        if assigned_to is not None:
            query = query.filter(Task.assigned_to == assigned_to)
        if status:
            query = query.filter(Task.status == status)
        if priority:
            query = query.filter(Task.priority == priority)
        # undated tasks sort last
        return query.order_by(Task.due_date.is_(None), Task.due_date, Task.id).all()

    def create_task(self, fields: TaskCreate) -> Task:
        task = Task(
            title=fields.title,
            description=fields.description,
            status=fields.status,
            priority=fields.priority,
            assigned_to=fields.assigned_to,
            due_date=fields.due_date,
        )
        with self._transaction("Team member does not exist"):
            self._require_team_member(fields.assigned_to)
            self.db.add(task)
        self.db.refresh(task)
        logger.info(f"Task {task.id} created for team member {task.assigned_to}")
        return task

    def update_task(self, task_id: int, fields: TaskUpdate) -> Task:
        changes = coalesce_changes(fields)
        if not changes:
            raise ValidationError("No fields to update")

        with self._transaction("Team member does not exist"):
            task = self.db.query(Task).filter(Task.id == task_id).first()
            if task is None:
                raise NotFoundError("Task not found")
            if "assigned_to" in changes and changes["assigned_to"] != task.assigned_to:
                self._require_team_member(changes["assigned_to"])
            for field, value in changes.items():
                setattr(task, field, value)
        self.db.refresh(task)
        logger.info(f"Task {task_id} updated: {sorted(changes)}")
        return task

    def delete_task(self, task_id: int) -> None:
        with self._transaction("Task could not be deleted"):
            deleted = self.db.query(Task).filter(Task.id == task_id).delete(synchronize_session=False)
            if not deleted:
                raise NotFoundError("Task not found")
        logger.info(f"Task {task_id} deleted")
