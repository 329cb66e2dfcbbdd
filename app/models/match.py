from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Text, Enum
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.enums import MatchStatus
import datetime

class Match(Base):
    __tablename__ = "matches"

    id = Column(Integer, primary_key=True, index=True)
    tournament_id = Column(Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True)
    round = Column(Integer, nullable=False) # Round number in the tournament
    bracket_position = Column(String(255), nullable=True) # e.g., "semifinal-1", "final"
    participant1_id = Column(Integer, ForeignKey("tournament_participants.id", ondelete="SET NULL"), nullable=True)
    participant2_id = Column(Integer, ForeignKey("tournament_participants.id", ondelete="SET NULL"), nullable=True)
    winner_id = Column(Integer, ForeignKey("tournament_participants.id", ondelete="SET NULL"), nullable=True)
    participant1_score = Column(Integer, nullable=True)
    participant2_score = Column(Integer, nullable=True)
    status = Column(
        Enum(MatchStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=MatchStatus.SCHEDULED,
    )
    scheduled_at = Column(DateTime, nullable=True)
    started_at = Column(DateTime, nullable=True)
    completed_at = Column(DateTime, nullable=True)
    location = Column(String(255), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    tournament = relationship("Tournament", back_populates="matches")
    participant1 = relationship("TournamentParticipant", foreign_keys=[participant1_id])
    participant2 = relationship("TournamentParticipant", foreign_keys=[participant2_id])
    winner = relationship("TournamentParticipant", foreign_keys=[winner_id])

    # Participants don't back-populate matches: there are three paths from a
    # participant to a match, and none of them is needed for navigation.
