from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.services import auth_service, user_service
from app.models import user as user_model
from app.schemas import user_schemas
from app.schemas.common_schemas import ApiResponse
from app.api.dependencies import get_db
from app.api.responses import success
from app.core.messages import SuccessMessageKeys

router = APIRouter()

@router.get("", response_model=ApiResponse[user_schemas.UserRead])
async def read_profile_endpoint(current_user: user_model.User = Depends(auth_service.get_current_user)):
    return success(current_user, SuccessMessageKeys.PROFILE_RETRIEVED)

@router.put("", response_model=ApiResponse[user_schemas.UserRead])
async def update_profile_endpoint(
    profile_in: user_schemas.ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    user = user_service.update_profile(db=db, user=current_user, profile_in=profile_in)
    return success(user, SuccessMessageKeys.PROFILE_UPDATED)

@router.put("/password", response_model=ApiResponse[None])
async def change_password_endpoint(
    password_in: user_schemas.PasswordChange,
    db: Session = Depends(get_db),
    current_user: user_model.User = Depends(auth_service.get_current_user),
):
    user_service.change_password(db=db, user=current_user, password_in=password_in)
    return success(key=SuccessMessageKeys.PASSWORD_CHANGED)
