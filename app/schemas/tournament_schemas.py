from pydantic import BaseModel, Field, model_validator
from typing import Optional, List
from datetime import datetime

from app.models.enums import TournamentFormat, TournamentStatus
from .user_schemas import UserRead
from .participant_schemas import ParticipantRead
from .match_schemas import MatchRead

class TournamentBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    game_type: str = Field(..., min_length=1, max_length=255) # e.g., "FIFA", "Chess"
    format: TournamentFormat
    max_participants: Optional[int] = Field(None, ge=1)
    is_team_based: bool = False
    team_size: Optional[int] = Field(None, ge=1)
    rules: Optional[str] = None
    prizes: Optional[str] = None
    registration_start: Optional[datetime] = None
    registration_end: Optional[datetime] = None
    start_date: Optional[datetime] = None
    end_date: Optional[datetime] = None

class TournamentCreate(TournamentBase):
    @model_validator(mode="after")
    def end_date_after_start_date(self):
        if self.start_date and self.end_date and self.end_date < self.start_date:
            raise ValueError("end_date must be after start_date")
        return self

class TournamentUpdate(TournamentBase):
    # No created_by: the creator is fixed at creation
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    game_type: Optional[str] = Field(None, min_length=1, max_length=255)
    format: Optional[TournamentFormat] = None
    is_team_based: Optional[bool] = None
    status: Optional[TournamentStatus] = None

class TournamentRead(TournamentBase):
    id: int
    status: TournamentStatus
    created_by: int
    created_at: datetime
    updated_at: Optional[datetime] = None
    creator: Optional[UserRead] = None

    class Config:
        from_attributes = True

class TournamentDetail(TournamentRead):
    participants: List[ParticipantRead] = []
    matches: List[MatchRead] = []
