"""Tournament registration, participant status updates and withdrawal.

Registration is the one multi-step rule in the API. The checks run in a
fixed order and the first failure wins:

1. the tournament is open for registration,
2. it is not full (every row counts, withdrawn ones included),
3. the entrant is not already registered,
4. the entrant kind (user or team) matches ``is_team_based``.

The tournament row is read ``FOR UPDATE`` so concurrent registrations for the
same tournament queue behind each other, and the unique constraints on
``tournament_participants`` catch any duplicate that slips through anyway.
"""

import datetime
from typing import List, Optional

import structlog
from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import ApiError, forbidden, not_found
from app.core.messages import ErrorMessageKeys
from app.models import participant as participant_model
from app.models import team as team_model
from app.models import tournament as tournament_model
from app.models import user as user_model
from app.models.enums import ParticipantStatus, TournamentStatus
from app.schemas import participant_schemas
from app.services import tournament_service
from app.services.ownership import ensure_owner

logger = structlog.get_logger(__name__)

Participant = participant_model.TournamentParticipant

def _reject(db: Session, status_code: int, key: ErrorMessageKeys, **context) -> ApiError:
    # Release the row lock before the error propagates
    db.rollback()
    logger.info("participant_registration_rejected", reason=key.value, **context)
    return ApiError(status_code, key)

def count_participants(db: Session, tournament_id: int) -> int:
    return db.query(Participant).filter(Participant.tournament_id == tournament_id).count()

def find_registration(db: Session, tournament_id: int, user_id: int, team_id: Optional[int] = None) -> Optional[participant_model.TournamentParticipant]:
    query = db.query(Participant).filter(Participant.tournament_id == tournament_id)
    if team_id:
        return query.filter(Participant.team_id == team_id).first()
    return query.filter(Participant.user_id == user_id).first()

def get_participant(db: Session, participant_id: int) -> Optional[participant_model.TournamentParticipant]:
    return db.query(Participant).filter(Participant.id == participant_id).first()

def get_participant_or_404(db: Session, participant_id: int) -> participant_model.TournamentParticipant:
    participant = get_participant(db, participant_id)
    if not participant:
        raise not_found("participant")
    return participant

def list_participants(db: Session, tournament_id: int) -> List[participant_model.TournamentParticipant]:
    tournament_service.get_tournament_or_404(db, tournament_id)
    return (
        db.query(Participant)
        .options(joinedload(Participant.user), joinedload(Participant.team))
        .filter(Participant.tournament_id == tournament_id)
        .order_by(Participant.id)
        .all()
    )

def register_participant(
    db: Session,
    tournament_id: int,
    user: user_model.User,
    team_id: Optional[int] = None,
) -> participant_model.TournamentParticipant:
    tournament = (
        db.query(tournament_model.Tournament)
        .filter(tournament_model.Tournament.id == tournament_id)
        .with_for_update()
        .first()
    )
    if not tournament:
        db.rollback()
        raise not_found("tournament")

    log_context = {"tournament_id": tournament_id, "user_id": user.id, "team_id": team_id}

    if tournament.status != TournamentStatus.REGISTRATION_OPEN:
        raise _reject(db, status.HTTP_400_BAD_REQUEST, ErrorMessageKeys.PARTICIPANT_REGISTRATION_NOT_OPEN, **log_context)

    if tournament.max_participants:
        if count_participants(db, tournament.id) >= tournament.max_participants:
            raise _reject(db, status.HTTP_400_BAD_REQUEST, ErrorMessageKeys.PARTICIPANT_TOURNAMENT_FULL, **log_context)

    if find_registration(db, tournament.id, user.id, team_id):
        raise _reject(db, status.HTTP_409_CONFLICT, ErrorMessageKeys.PARTICIPANT_ALREADY_REGISTERED, **log_context)

    if tournament.is_team_based and not team_id:
        raise _reject(db, status.HTTP_400_BAD_REQUEST, ErrorMessageKeys.PARTICIPANT_TEAM_REQUIRED, **log_context)
    if not tournament.is_team_based and team_id:
        raise _reject(db, status.HTTP_400_BAD_REQUEST, ErrorMessageKeys.PARTICIPANT_INDIVIDUAL_ONLY, **log_context)

    if team_id:
        team = db.query(team_model.Team).filter(team_model.Team.id == team_id).first()
        if not team:
            db.rollback()
            raise not_found("team")

    participant = Participant(
        tournament_id=tournament.id,
        user_id=None if tournament.is_team_based else user.id,
        team_id=team_id if tournament.is_team_based else None,
        status=ParticipantStatus.REGISTERED,
        registered_at=datetime.datetime.utcnow(),
    )
    db.add(participant)
    try:
        db.commit()
    except IntegrityError:
        raise _reject(db, status.HTTP_409_CONFLICT, ErrorMessageKeys.PARTICIPANT_ALREADY_REGISTERED, **log_context)
    db.refresh(participant)
    logger.info("participant_registered", participant_id=participant.id, **log_context)
    return participant

def update_participant(
    db: Session,
    participant_id: int,
    participant_update: participant_schemas.ParticipantUpdate,
    current_user_id: int,
) -> participant_model.TournamentParticipant:
    participant = get_participant_or_404(db, participant_id)
    ensure_owner(participant.tournament.created_by, current_user_id, ErrorMessageKeys.TOURNAMENT_NOT_OWNER, "participant")

    update_data = participant_update.model_dump(exclude_unset=True)
    if update_data.get("status", "") is None:
        del update_data["status"]
    for key, value in update_data.items():
        setattr(participant, key, value)

    db.commit()
    db.refresh(participant)
    logger.info("participant_updated", participant_id=participant_id, fields=sorted(update_data))
    return participant

def withdraw_participant(db: Session, participant_id: int, current_user_id: int) -> participant_model.TournamentParticipant:
    """Mark a participant as withdrawn.

    Allowed for the participant's own user, or for the captain of the
    participant's team. The row is kept so the slot history survives.
    """
    participant = get_participant_or_404(db, participant_id)
    if participant.user_id != current_user_id:
        if not participant.team or participant.team.captain_id != current_user_id:
            raise forbidden(ErrorMessageKeys.PARTICIPANT_WITHDRAW_FORBIDDEN)

    participant.status = ParticipantStatus.WITHDREW
    db.commit()
    db.refresh(participant)
    logger.info("participant_withdrew", participant_id=participant_id, actor_id=current_user_id)
    return participant
