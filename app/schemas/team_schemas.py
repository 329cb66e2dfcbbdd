from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.models.enums import TeamRole
from .user_schemas import UserRead

class TeamBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    logo_url: Optional[str] = Field(None, max_length=2048)

class TeamCreate(TeamBase):
    pass

class TeamUpdate(TeamBase):
    name: Optional[str] = Field(None, min_length=1, max_length=255)

class TeamMemberAdd(BaseModel):
    user_id: int
    role: TeamRole = TeamRole.MEMBER

class TeamMemberRead(BaseModel):
    user_id: int
    role: TeamRole
    joined_at: datetime
    user: UserRead

    class Config:
        from_attributes = True

class TeamRead(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    logo_url: Optional[str] = None
    captain_id: Optional[int] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    captain: Optional[UserRead] = None
    members: List[TeamMemberRead] = []

    class Config:
        from_attributes = True
