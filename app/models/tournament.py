from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Boolean, Text, Enum
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.enums import TournamentFormat, TournamentStatus
import datetime

def _enum_values(enum_cls):
    return [member.value for member in enum_cls]

class Tournament(Base):
    __tablename__ = "tournaments"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    game_type = Column(String(255), nullable=False) # e.g., "FIFA", "League of Legends", "Chess"
    format = Column(Enum(TournamentFormat, values_callable=_enum_values, native_enum=False), nullable=False)
    status = Column(
        Enum(TournamentStatus, values_callable=_enum_values, native_enum=False),
        nullable=False,
        default=TournamentStatus.DRAFT,
    )
    max_participants = Column(Integer, nullable=True)
    is_team_based = Column(Boolean, nullable=False, default=False)
    team_size = Column(Integer, nullable=True)
    rules = Column(Text, nullable=True)
    prizes = Column(Text, nullable=True)
    registration_start = Column(DateTime, nullable=True)
    registration_end = Column(DateTime, nullable=True)
    start_date = Column(DateTime, nullable=True)
    end_date = Column(DateTime, nullable=True)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    creator = relationship("User", back_populates="created_tournaments")
    participants = relationship(
        "TournamentParticipant",
        back_populates="tournament",
        cascade="all, delete-orphan",
        order_by="TournamentParticipant.id",
    )
    matches = relationship(
        "Match",
        back_populates="tournament",
        cascade="all, delete-orphan",
        order_by="Match.round",
    )
