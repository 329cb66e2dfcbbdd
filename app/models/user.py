from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from sqlalchemy.orm import relationship
from app.core.database import Base
import datetime

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    full_name = Column(String(255), nullable=True)
    email = Column(String(254), unique=True, index=True, nullable=False)
    password = Column(String(255), nullable=False) # bcrypt hash, never serialized
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    access_tokens = relationship("AccessToken", back_populates="user", cascade="all, delete-orphan")
    created_tournaments = relationship("Tournament", back_populates="creator")
    captained_teams = relationship("Team", back_populates="captain")
    memberships = relationship("TeamMembership", back_populates="user", cascade="all, delete-orphan")
    participations = relationship("TournamentParticipant", back_populates="user")


class AccessToken(Base):
    """Issued bearer token. The JWT only resolves while its row exists."""

    __tablename__ = "auth_access_tokens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    jti = Column(String(64), unique=True, index=True, nullable=False)
    expires_at = Column(DateTime, nullable=True)
    last_used_at = Column(DateTime, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow, nullable=False)

    user = relationship("User", back_populates="access_tokens")
