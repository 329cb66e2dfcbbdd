from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.services import team_service, auth_service
from app.models import user as user_model
from app.schemas import team_schemas
from app.schemas.common_schemas import ApiResponse, Page
from app.api.dependencies import get_db, Pagination
from app.api.responses import success
from app.core.messages import SuccessMessageKeys

router = APIRouter()

@router.get("", response_model=ApiResponse[Page[team_schemas.TeamRead]])
async def list_teams_endpoint(
    pagination: dict = Depends(Pagination(default_limit=10)),
    db: Session = Depends(get_db),
):
    return success(team_service.list_teams(db=db, **pagination))

@router.post("", response_model=ApiResponse[team_schemas.TeamRead], status_code=status.HTTP_201_CREATED)
async def create_team_endpoint(
    team_in: team_schemas.TeamCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    team = team_service.create_team(db=db, team=team_in, captain_id=current_user.id)
    return success(team, SuccessMessageKeys.TEAM_CREATED)

@router.get("/{team_id}", response_model=ApiResponse[team_schemas.TeamRead])
async def get_team_endpoint(team_id: int, db: Session = Depends(get_db)):
    return success(team_service.get_team_or_404(db=db, team_id=team_id))

@router.put("/{team_id}", response_model=ApiResponse[team_schemas.TeamRead])
async def update_team_endpoint(
    team_id: int,
    team_in: team_schemas.TeamUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    team = team_service.update_team(db=db, team_id=team_id, team_update=team_in, current_user_id=current_user.id)
    return success(team, SuccessMessageKeys.TEAM_UPDATED)

@router.delete("/{team_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_team_endpoint(
    team_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    team_service.delete_team(db=db, team_id=team_id, current_user_id=current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)

@router.post("/{team_id}/members", response_model=ApiResponse[team_schemas.TeamRead])
async def add_team_member_endpoint(
    team_id: int,
    member_in: team_schemas.TeamMemberAdd,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    team = team_service.add_member(db=db, team_id=team_id, member=member_in, current_user_id=current_user.id)
    return success(team, SuccessMessageKeys.TEAM_MEMBER_ADDED)

@router.delete("/{team_id}/members/{user_id}", response_model=ApiResponse[team_schemas.TeamRead])
async def remove_team_member_endpoint(
    team_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    team = team_service.remove_member(db=db, team_id=team_id, user_id=user_id, current_user_id=current_user.id)
    return success(team, SuccessMessageKeys.TEAM_MEMBER_REMOVED)
