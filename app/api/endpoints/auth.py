from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.services import auth_service
from app.models import user as user_model
from app.schemas import auth_schemas, user_schemas
from app.schemas.common_schemas import ApiResponse
from app.api.dependencies import get_db
from app.api.responses import success
from app.core.messages import SuccessMessageKeys

router = APIRouter()

@router.post("/register", response_model=ApiResponse[auth_schemas.AuthPayload], status_code=status.HTTP_201_CREATED)
async def register_endpoint(user_in: user_schemas.UserCreate, db: Session = Depends(get_db)):
    payload = auth_service.register(db=db, user_in=user_in)
    return success(payload, SuccessMessageKeys.AUTH_REGISTER_SUCCESS)

@router.post("/login", response_model=ApiResponse[auth_schemas.AuthPayload])
async def login_endpoint(credentials: user_schemas.UserLogin, db: Session = Depends(get_db)):
    payload = auth_service.login(db=db, credentials=credentials)
    return success(payload, SuccessMessageKeys.AUTH_LOGIN_SUCCESS)

@router.post("/logout", response_model=ApiResponse[None])
async def logout_endpoint(
    access_token: user_model.AccessToken = Depends(auth_service.get_current_token),
    db: Session = Depends(get_db),
):
    # Only the token used for this request is revoked
    auth_service.logout(db=db, access_token=access_token)
    return success(key=SuccessMessageKeys.AUTH_LOGOUT_SUCCESS)

@router.get("/me", response_model=ApiResponse[user_schemas.UserRead])
async def read_current_user_endpoint(current_user: user_model.User = Depends(auth_service.get_current_user)):
    return success(current_user)
