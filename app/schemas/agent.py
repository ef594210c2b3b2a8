from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime


class AgentCreate(BaseModel):
    name: str = Field(..., min_length=1)
    role: str = Field(..., min_length=1)
    office: str = Field(..., min_length=1)
    region: str = Field(..., min_length=1)
    skills: Optional[List[str]] = None
    active_status: Optional[bool] = None

    model_config = {
        "str_strip_whitespace": True
    }


class AgentUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1)
    role: Optional[str] = Field(None, min_length=1)
    office: Optional[str] = Field(None, min_length=1)
    region: Optional[str] = Field(None, min_length=1)
    skills: Optional[List[str]] = None
    active_status: Optional[bool] = None

    model_config = {
        "str_strip_whitespace": True
    }


class AgentOut(BaseModel):
    id: int
    name: str
    role: str
    office: str
    region: str
    skills: List[str] = []
    active_status: bool
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {
        "from_attributes": True
    }
