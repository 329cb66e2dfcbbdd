from sqlalchemy import Column, Integer, ForeignKey, DateTime, Enum, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base
from app.models.enums import ParticipantStatus
import datetime

class TournamentParticipant(Base):
    """A tournament entrant: either a solo user or a team, never both."""

    __tablename__ = "tournament_participants"
    # NULLs are distinct, so each constraint only bites for its own entrant kind
    __table_args__ = (
        UniqueConstraint("tournament_id", "user_id", name="uq_participants_tournament_user"),
        UniqueConstraint("tournament_id", "team_id", name="uq_participants_tournament_team"),
    )

    id = Column(Integer, primary_key=True, index=True)
    tournament_id = Column(Integer, ForeignKey("tournaments.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=True)
    team_id = Column(Integer, ForeignKey("teams.id", ondelete="CASCADE"), nullable=True)
    seed = Column(Integer, nullable=True)
    status = Column(
        Enum(ParticipantStatus, values_callable=lambda e: [m.value for m in e], native_enum=False),
        nullable=False,
        default=ParticipantStatus.REGISTERED,
    )
    registered_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    tournament = relationship("Tournament", back_populates="participants")
    user = relationship("User", back_populates="participations")
    team = relationship("Team", back_populates="participations")
