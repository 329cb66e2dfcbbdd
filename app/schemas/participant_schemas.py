from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.enums import ParticipantStatus
from .user_schemas import UserRead
from .team_schemas import TeamRead

class ParticipantRegister(BaseModel):
    # Only team-based tournaments take a team; solo entrants register themselves
    team_id: Optional[int] = None

class ParticipantUpdate(BaseModel):
    status: Optional[ParticipantStatus] = None
    seed: Optional[int] = Field(None, ge=1)

class ParticipantRead(BaseModel):
    id: int
    tournament_id: int
    user_id: Optional[int] = None
    team_id: Optional[int] = None
    seed: Optional[int] = None
    status: ParticipantStatus
    registered_at: datetime
    created_at: datetime
    updated_at: Optional[datetime] = None
    user: Optional[UserRead] = None
    team: Optional[TeamRead] = None

    class Config:
        from_attributes = True
