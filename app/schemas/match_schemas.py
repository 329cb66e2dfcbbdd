from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from app.models.enums import MatchStatus
from .participant_schemas import ParticipantRead

class MatchBase(BaseModel):
    round: int = Field(..., ge=1)
    bracket_position: Optional[str] = Field(None, max_length=255)
    participant1_id: Optional[int] = None
    participant2_id: Optional[int] = None
    scheduled_at: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None

class MatchCreate(MatchBase):
    tournament_id: int

class MatchUpdate(BaseModel):
    """Result/schedule fields merged onto an existing match.

    Nothing here ties ``winner_id`` to the match's own participants or
    orders the timestamps; the update is a plain field merge.
    """
    participant1_score: Optional[int] = None
    participant2_score: Optional[int] = None
    winner_id: Optional[int] = None
    status: Optional[MatchStatus] = None
    scheduled_at: Optional[datetime] = None
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    location: Optional[str] = Field(None, max_length=255)
    notes: Optional[str] = None

class MatchRead(MatchBase):
    id: int
    tournament_id: int
    winner_id: Optional[int] = None
    participant1_score: Optional[int] = None
    participant2_score: Optional[int] = None
    status: MatchStatus
    started_at: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    participant1: Optional[ParticipantRead] = None
    participant2: Optional[ParticipantRead] = None
    winner: Optional[ParticipantRead] = None

    class Config:
        from_attributes = True
