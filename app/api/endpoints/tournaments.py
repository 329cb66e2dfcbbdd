from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.services import tournament_service, participant_service, auth_service
from app.models import user as user_model
from app.models.enums import TournamentStatus
from app.schemas import tournament_schemas, participant_schemas
from app.schemas.common_schemas import ApiResponse, Page
from app.api.dependencies import get_db, Pagination
from app.api.responses import success
from app.core.messages import SuccessMessageKeys

router = APIRouter()

@router.get("", response_model=ApiResponse[Page[tournament_schemas.TournamentRead]])
async def list_tournaments_endpoint(
    status_filter: Optional[TournamentStatus] = Query(None, alias="status"),
    pagination: dict = Depends(Pagination(default_limit=10)),
    db: Session = Depends(get_db),
):
    page = tournament_service.list_tournaments(db=db, status=status_filter, **pagination)
    return success(page)

@router.post("", response_model=ApiResponse[tournament_schemas.TournamentRead], status_code=status.HTTP_201_CREATED)
async def create_tournament_endpoint(
    tournament_in: tournament_schemas.TournamentCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    tournament = tournament_service.create_tournament(db=db, tournament=tournament_in, creator_id=current_user.id)
    return success(tournament, SuccessMessageKeys.TOURNAMENT_CREATED)

@router.get("/{tournament_id}", response_model=ApiResponse[tournament_schemas.TournamentDetail])
async def get_tournament_endpoint(tournament_id: int, db: Session = Depends(get_db)):
    tournament = tournament_service.get_tournament_detail(db=db, tournament_id=tournament_id)
    return success(tournament)

@router.put("/{tournament_id}", response_model=ApiResponse[tournament_schemas.TournamentRead])
async def update_tournament_endpoint(
    tournament_id: int,
    tournament_in: tournament_schemas.TournamentUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    tournament = tournament_service.update_tournament(
        db=db, tournament_id=tournament_id, tournament_update=tournament_in, current_user_id=current_user.id
    )
    return success(tournament, SuccessMessageKeys.TOURNAMENT_UPDATED)

@router.delete("/{tournament_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_tournament_endpoint(
    tournament_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    tournament_service.delete_tournament(db=db, tournament_id=tournament_id, current_user_id=current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.get("/{tournament_id}/participants", response_model=ApiResponse[List[participant_schemas.ParticipantRead]])
async def list_participants_endpoint(tournament_id: int, db: Session = Depends(get_db)):
    participants = participant_service.list_participants(db=db, tournament_id=tournament_id)
    return success(participants)

@router.post(
    "/{tournament_id}/participants",
    response_model=ApiResponse[participant_schemas.ParticipantRead],
    status_code=status.HTTP_201_CREATED,
)
async def register_participant_endpoint(
    tournament_id: int,
    registration_in: Optional[participant_schemas.ParticipantRegister] = None,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    team_id = registration_in.team_id if registration_in else None
    participant = participant_service.register_participant(
        db=db, tournament_id=tournament_id, user=current_user, team_id=team_id
    )
    return success(participant, SuccessMessageKeys.PARTICIPANT_REGISTERED)
