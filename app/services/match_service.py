from typing import Optional

import structlog
from sqlalchemy.orm import Session, joinedload

from app.core.errors import not_found
from app.core.messages import ErrorMessageKeys
from app.models import match as match_model
from app.models import participant as participant_model
from app.schemas import match_schemas
from app.services import tournament_service
from app.services.ownership import ensure_owner
from app.services.pagination import paginate

logger = structlog.get_logger(__name__)

def _match_query(db: Session):
    participant = participant_model.TournamentParticipant
    Match = match_model.Match
    options = []
    for side in (Match.participant1, Match.participant2, Match.winner):
        options.append(joinedload(side).joinedload(participant.user))
        options.append(joinedload(side).joinedload(participant.team))
    return db.query(Match).options(*options)

def get_match(db: Session, match_id: int) -> Optional[match_model.Match]:
    return _match_query(db).filter(match_model.Match.id == match_id).first()

def get_match_or_404(db: Session, match_id: int) -> match_model.Match:
    db_match = get_match(db, match_id)
    if not db_match:
        raise not_found("match")
    return db_match

def list_matches(db: Session, page: int = 1, limit: int = 50, tournament_id: Optional[int] = None) -> dict:
    query = _match_query(db)
    if tournament_id:
        query = query.filter(match_model.Match.tournament_id == tournament_id)
    return paginate(query.order_by(match_model.Match.round, match_model.Match.id), page=page, limit=limit)

def create_match(db: Session, match: match_schemas.MatchCreate, current_user_id: int) -> match_model.Match:
    tournament = tournament_service.get_tournament_or_404(db, match.tournament_id)
    ensure_owner(tournament.created_by, current_user_id, ErrorMessageKeys.TOURNAMENT_NOT_OWNER, "match")

    db_match = match_model.Match(**match.model_dump())
    db.add(db_match)
    db.commit()
    db.refresh(db_match)
    logger.info("match_created", match_id=db_match.id, tournament_id=tournament.id, round=db_match.round)
    return db_match

def update_match(db: Session, match_id: int, match_update: match_schemas.MatchUpdate, current_user_id: int) -> match_model.Match:
    """Merge the supplied result/schedule fields onto the match.

    Only the creator of the match's tournament may update it. Fields left out
    of the payload are untouched; the winner is not checked against the two
    participants and timestamps are stored as given.
    """
    db_match = get_match_or_404(db, match_id)
    ensure_owner(db_match.tournament.created_by, current_user_id, ErrorMessageKeys.TOURNAMENT_NOT_OWNER, "match")

    update_data = match_update.model_dump(exclude_unset=True)
    if update_data.get("status", "") is None:
        del update_data["status"]
    for key, value in update_data.items():
        setattr(db_match, key, value)

    db.commit()
    db.refresh(db_match)
    logger.info("match_updated", match_id=match_id, fields=sorted(update_data))
    return db_match

def delete_match(db: Session, match_id: int, current_user_id: int) -> None:
    db_match = get_match_or_404(db, match_id)
    ensure_owner(db_match.tournament.created_by, current_user_id, ErrorMessageKeys.TOURNAMENT_NOT_OWNER, "match")

    db.delete(db_match)
    db.commit()
    logger.info("match_deleted", match_id=match_id)
