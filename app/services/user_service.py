from typing import Optional

import structlog
from fastapi import status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core import security
from app.core.errors import ApiError
from app.core.messages import ErrorMessageKeys
from app.models import user as user_model
from app.schemas import user_schemas

logger = structlog.get_logger(__name__)

def get_user(db: Session, user_id: int) -> Optional[user_model.User]:
    return db.query(user_model.User).filter(user_model.User.id == user_id).first()

def get_user_by_email(db: Session, email: str) -> Optional[user_model.User]:
    return db.query(user_model.User).filter(user_model.User.email == email.lower()).first()

def create_user(db: Session, user_in: user_schemas.UserCreate) -> user_model.User:
    if get_user_by_email(db, user_in.email):
        raise ApiError(status.HTTP_409_CONFLICT, ErrorMessageKeys.AUTH_EMAIL_TAKEN, {"email": user_in.email})

    db_user = user_model.User(
        full_name=user_in.full_name,
        email=user_in.email,
        password=security.get_password_hash(user_in.password),
    )
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with a concurrent registration for the same email
        db.rollback()
        raise ApiError(status.HTTP_409_CONFLICT, ErrorMessageKeys.AUTH_EMAIL_TAKEN, {"email": user_in.email})
    db.refresh(db_user)
    logger.info("user_registered", user_id=db_user.id)
    return db_user

def update_profile(db: Session, user: user_model.User, profile_in: user_schemas.ProfileUpdate) -> user_model.User:
    update_data = profile_in.model_dump(exclude_unset=True)
    if "full_name" in update_data:
        user.full_name = update_data["full_name"] or None
    db.commit()
    db.refresh(user)
    return user

def change_password(db: Session, user: user_model.User, password_in: user_schemas.PasswordChange) -> None:
    if not security.verify_password(password_in.current_password, user.password):
        raise ApiError(status.HTTP_400_BAD_REQUEST, ErrorMessageKeys.INVALID_CURRENT_PASSWORD)
    user.password = security.get_password_hash(password_in.new_password)
    db.commit()
    logger.info("user_password_changed", user_id=user.id)
