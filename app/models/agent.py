# app/models/agent.py
from sqlalchemy import Column, Integer, String, Boolean, DateTime, JSON
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from app.database import Base


class Agent(Base):
    __tablename__ = "agents"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    role = Column(String, nullable=False)
    office = Column(String, nullable=False, index=True)
    region = Column(String, nullable=False, index=True)
    skills = Column(JSON, nullable=False, default=list)
    active_status = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    # Deletion is guarded in IntegrityManager; never cascade from here
    team_members = relationship("TeamMember", back_populates="agent", passive_deletes="all")
