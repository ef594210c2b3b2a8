from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime


class TeamMemberCreate(BaseModel):
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    agent_id: int
    active_status: Optional[bool] = None

    model_config = {
        "str_strip_whitespace": True
    }


class TeamMemberUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = Field(None, min_length=1)
    agent_id: Optional[int] = None
    active_status: Optional[bool] = None

    model_config = {
        "str_strip_whitespace": True
    }


class TeamMemberBasic(BaseModel):
    id: int
    name: str
    role: str
    agent_id: int

    model_config = {
        "from_attributes": True
    }


class TeamMemberOut(BaseModel):
    id: int
    name: str
    role: str
    agent_id: int
    active_status: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
