from typing import Optional

import structlog
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.errors import not_found
from app.core.messages import ErrorMessageKeys
from app.models import tournament as tournament_model
from app.models import participant as participant_model
from app.models.enums import TournamentStatus
from app.schemas import tournament_schemas
from app.services.ownership import ensure_owner
from app.services.pagination import paginate

logger = structlog.get_logger(__name__)

# Columns that an explicit null in an update must not clear
REQUIRED_FIELDS = {"name", "game_type", "format", "is_team_based", "status"}

def create_tournament(db: Session, tournament: tournament_schemas.TournamentCreate, creator_id: int) -> tournament_model.Tournament:
    db_tournament = tournament_model.Tournament(
        **tournament.model_dump(),
        created_by=creator_id,
        status=TournamentStatus.DRAFT,
    )
    db.add(db_tournament)
    db.commit()
    db.refresh(db_tournament)
    logger.info("tournament_created", tournament_id=db_tournament.id, created_by=creator_id)
    return db_tournament

def get_tournament(db: Session, tournament_id: int) -> Optional[tournament_model.Tournament]:
    return db.query(tournament_model.Tournament).filter(tournament_model.Tournament.id == tournament_id).first()

def get_tournament_or_404(db: Session, tournament_id: int) -> tournament_model.Tournament:
    db_tournament = get_tournament(db, tournament_id)
    if not db_tournament:
        raise not_found("tournament")
    return db_tournament

def get_tournament_detail(db: Session, tournament_id: int) -> tournament_model.Tournament:
    """Tournament with creator, participants (user/team) and matches loaded."""
    participant = participant_model.TournamentParticipant
    db_tournament = (
        db.query(tournament_model.Tournament)
        .options(
            joinedload(tournament_model.Tournament.creator),
            selectinload(tournament_model.Tournament.participants).joinedload(participant.user),
            selectinload(tournament_model.Tournament.participants).joinedload(participant.team),
            selectinload(tournament_model.Tournament.matches),
        )
        .filter(tournament_model.Tournament.id == tournament_id)
        .first()
    )
    if not db_tournament:
        raise not_found("tournament")
    return db_tournament

def list_tournaments(db: Session, page: int = 1, limit: int = 10, status: Optional[TournamentStatus] = None) -> dict:
    query = db.query(tournament_model.Tournament).options(joinedload(tournament_model.Tournament.creator))
    if status:
        query = query.filter(tournament_model.Tournament.status == status)
    return paginate(query.order_by(tournament_model.Tournament.id), page=page, limit=limit)

def update_tournament(db: Session, tournament_id: int, tournament_update: tournament_schemas.TournamentUpdate, current_user_id: int) -> tournament_model.Tournament:
    db_tournament = get_tournament_or_404(db, tournament_id)
    ensure_owner(db_tournament.created_by, current_user_id, ErrorMessageKeys.TOURNAMENT_NOT_OWNER, "tournament")

    # Any status may be set in any order; there is no transition table.
    update_data = tournament_update.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        if value is None and key in REQUIRED_FIELDS:
            continue
        setattr(db_tournament, key, value)

    db.commit()
    db.refresh(db_tournament)
    logger.info("tournament_updated", tournament_id=tournament_id, fields=sorted(update_data))
    return db_tournament

def delete_tournament(db: Session, tournament_id: int, current_user_id: int) -> None:
    db_tournament = get_tournament_or_404(db, tournament_id)
    ensure_owner(db_tournament.created_by, current_user_id, ErrorMessageKeys.TOURNAMENT_NOT_OWNER, "tournament")

    # Participants and matches go with it (cascade on the relationships)
    db.delete(db_tournament)
    db.commit()
    logger.info("tournament_deleted", tournament_id=tournament_id)
