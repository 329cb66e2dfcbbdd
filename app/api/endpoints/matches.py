from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from app.services import match_service, auth_service
from app.models import user as user_model
from app.schemas import match_schemas
from app.schemas.common_schemas import ApiResponse, Page
from app.api.dependencies import get_db, Pagination
from app.api.responses import success
from app.core.messages import SuccessMessageKeys

router = APIRouter()

@router.get("", response_model=ApiResponse[Page[match_schemas.MatchRead]])
async def list_matches_endpoint(
    tournament_id: Optional[int] = None,
    pagination: dict = Depends(Pagination(default_limit=50)),
    db: Session = Depends(get_db),
):
    page = match_service.list_matches(db=db, tournament_id=tournament_id, **pagination)
    return success(page)

@router.post("", response_model=ApiResponse[match_schemas.MatchRead], status_code=status.HTTP_201_CREATED)
async def create_match_endpoint(
    match_in: match_schemas.MatchCreate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    match = match_service.create_match(db=db, match=match_in, current_user_id=current_user.id)
    return success(match, SuccessMessageKeys.MATCH_CREATED)

@router.get("/{match_id}", response_model=ApiResponse[match_schemas.MatchRead])
async def get_match_endpoint(match_id: int, db: Session = Depends(get_db)):
    return success(match_service.get_match_or_404(db=db, match_id=match_id))

@router.put("/{match_id}", response_model=ApiResponse[match_schemas.MatchRead])
async def update_match_endpoint(
    match_id: int,
    match_in: match_schemas.MatchUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    match = match_service.update_match(db=db, match_id=match_id, match_update=match_in, current_user_id=current_user.id)
    return success(match, SuccessMessageKeys.MATCH_UPDATED)

@router.delete("/{match_id}", status_code=status.HTTP_204_NO_CONTENT, response_class=Response)
async def delete_match_endpoint(
    match_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    match_service.delete_match(db=db, match_id=match_id, current_user_id=current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
