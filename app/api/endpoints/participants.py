from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.services import participant_service, auth_service
from app.models import user as user_model
from app.schemas import participant_schemas
from app.schemas.common_schemas import ApiResponse
from app.api.dependencies import get_db
from app.api.responses import success
from app.core.messages import SuccessMessageKeys

router = APIRouter()

@router.put("/{participant_id}", response_model=ApiResponse[participant_schemas.ParticipantRead])
async def update_participant_endpoint(
    participant_id: int,
    participant_in: participant_schemas.ParticipantUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user), # Must be the tournament creator
):
    participant = participant_service.update_participant(
        db=db, participant_id=participant_id, participant_update=participant_in, current_user_id=current_user.id
    )
    return success(participant, SuccessMessageKeys.PARTICIPANT_UPDATED)

@router.delete("/{participant_id}", response_model=ApiResponse[participant_schemas.ParticipantRead])
async def withdraw_participant_endpoint(
    participant_id: int,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    participant = participant_service.withdraw_participant(
        db=db, participant_id=participant_id, current_user_id=current_user.id
    )
    return success(participant, SuccessMessageKeys.PARTICIPANT_WITHDREW)
