from typing import Optional

import structlog
from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, joinedload, selectinload

from app.core.errors import ApiError, not_found
from app.core.messages import ErrorMessageKeys
from app.models import team as team_model
from app.models.enums import TeamRole
from app.schemas import team_schemas
from app.services import user_service
from app.services.ownership import ensure_owner
from app.services.pagination import paginate

logger = structlog.get_logger(__name__)

def _team_query(db: Session):
    return db.query(team_model.Team).options(
        joinedload(team_model.Team.captain),
        selectinload(team_model.Team.members).joinedload(team_model.TeamMembership.user),
    )

def create_team(db: Session, team: team_schemas.TeamCreate, captain_id: int) -> team_model.Team:
    db_team = team_model.Team(**team.model_dump(), captain_id=captain_id)
    # The captain is also the first member of the roster
    db_team.members.append(team_model.TeamMembership(user_id=captain_id, role=TeamRole.CAPTAIN))
    db.add(db_team)
    db.commit()
    db.refresh(db_team)
    logger.info("team_created", team_id=db_team.id, captain_id=captain_id)
    return db_team

def get_team(db: Session, team_id: int) -> Optional[team_model.Team]:
    return _team_query(db).filter(team_model.Team.id == team_id).first()

def get_team_or_404(db: Session, team_id: int) -> team_model.Team:
    db_team = get_team(db, team_id)
    if not db_team:
        raise not_found("team")
    return db_team

def list_teams(db: Session, page: int = 1, limit: int = 10) -> dict:
    return paginate(_team_query(db).order_by(team_model.Team.id), page=page, limit=limit)

def update_team(db: Session, team_id: int, team_update: team_schemas.TeamUpdate, current_user_id: int) -> team_model.Team:
    db_team = get_team_or_404(db, team_id)
    ensure_owner(db_team.captain_id, current_user_id, ErrorMessageKeys.TEAM_NOT_CAPTAIN, "team")

    update_data = team_update.model_dump(exclude_unset=True)
    if update_data.get("name", "") is None:
        del update_data["name"]
    for key, value in update_data.items():
        setattr(db_team, key, value)

    db.commit()
    db.refresh(db_team)
    logger.info("team_updated", team_id=team_id, fields=sorted(update_data))
    return db_team

def delete_team(db: Session, team_id: int, current_user_id: int) -> None:
    db_team = get_team_or_404(db, team_id)
    ensure_owner(db_team.captain_id, current_user_id, ErrorMessageKeys.TEAM_NOT_CAPTAIN, "team")

    db.delete(db_team)
    db.commit()
    logger.info("team_deleted", team_id=team_id)

def add_member(db: Session, team_id: int, member: team_schemas.TeamMemberAdd, current_user_id: int) -> team_model.Team:
    db_team = get_team_or_404(db, team_id)
    ensure_owner(db_team.captain_id, current_user_id, ErrorMessageKeys.TEAM_NOT_CAPTAIN, "team")

    if not user_service.get_user(db, member.user_id):
        raise not_found("user")
    if any(m.user_id == member.user_id for m in db_team.members):
        raise ApiError(status.HTTP_409_CONFLICT, ErrorMessageKeys.TEAM_ALREADY_MEMBER)

    membership = team_model.TeamMembership(team_id=team_id, user_id=member.user_id, role=member.role)
    db.add(membership)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        raise ApiError(status.HTTP_409_CONFLICT, ErrorMessageKeys.TEAM_ALREADY_MEMBER)
    db.refresh(db_team)
    logger.info("team_member_added", team_id=team_id, user_id=member.user_id, role=member.role.value)
    return db_team

def remove_member(db: Session, team_id: int, user_id: int, current_user_id: int) -> team_model.Team:
    db_team = get_team_or_404(db, team_id)
    ensure_owner(db_team.captain_id, current_user_id, ErrorMessageKeys.TEAM_NOT_CAPTAIN, "team")

    membership = next((m for m in db_team.members if m.user_id == user_id), None)
    if membership is None:
        raise ApiError(status.HTTP_404_NOT_FOUND, ErrorMessageKeys.TEAM_MEMBER_NOT_FOUND)

    db_team.members.remove(membership)
    db.commit()
    db.refresh(db_team)
    logger.info("team_member_removed", team_id=team_id, user_id=user_id)
    return db_team
