import datetime
from typing import Optional

import structlog
from fastapi import Depends, status
from sqlalchemy.orm import Session

from app.api.dependencies import get_db
from app.core import security
from app.core.errors import ApiError, unauthorized
from app.core.messages import ErrorMessageKeys
from app.models import user as user_model
from app.schemas import auth_schemas, user_schemas
from app.services import user_service

logger = structlog.get_logger(__name__)

def issue_token(db: Session, user: user_model.User) -> auth_schemas.Token:
    """Mint a bearer token for ``user`` and record it so it can be revoked."""
    # The subject of the token ('sub') is the user's email, which never changes.
    # Drop this user's expired rows so the table does not grow without bound
    db.query(user_model.AccessToken).filter(
        user_model.AccessToken.user_id == user.id,
        user_model.AccessToken.expires_at < datetime.datetime.utcnow(),
    ).delete(synchronize_session=False)
    token, jti, expires_at = security.create_access_token(data={"sub": user.email})
    db.add(user_model.AccessToken(user_id=user.id, jti=jti, expires_at=expires_at))
    db.commit()
    return auth_schemas.Token(token=token)

def register(db: Session, user_in: user_schemas.UserCreate) -> auth_schemas.AuthPayload:
    user = user_service.create_user(db, user_in)
    token = issue_token(db, user)
    return auth_schemas.AuthPayload(user=user_schemas.UserRead.model_validate(user), token=token)

def authenticate(db: Session, email: str, password: str) -> Optional[user_model.User]:
    user = user_service.get_user_by_email(db, email)
    if not user:
        # Keep the response time of unknown emails close to wrong passwords
        security.pwd_context.dummy_verify()
        return None
    if not security.verify_password(password, user.password):
        return None
    return user

def login(db: Session, credentials: user_schemas.UserLogin) -> auth_schemas.AuthPayload:
    user = authenticate(db, credentials.email, credentials.password)
    if not user:
        logger.info("login_failed")
        raise ApiError(
            status.HTTP_401_UNAUTHORIZED,
            ErrorMessageKeys.AUTH_INVALID_CREDENTIALS,
            headers={"WWW-Authenticate": "Bearer"},
        )
    token = issue_token(db, user)
    logger.info("user_logged_in", user_id=user.id)
    return auth_schemas.AuthPayload(user=user_schemas.UserRead.model_validate(user), token=token)

def logout(db: Session, access_token: user_model.AccessToken) -> None:
    user_id = access_token.user_id
    db.delete(access_token)
    db.commit()
    logger.info("user_logged_out", user_id=user_id)

def get_current_token(
    token: Optional[str] = Depends(security.oauth2_scheme), db: Session = Depends(get_db)
) -> user_model.AccessToken:
    if not token:
        raise unauthorized(ErrorMessageKeys.AUTH_UNAUTHORIZED)

    token_data = security.verify_token(token)

    access_token = db.query(user_model.AccessToken).filter(user_model.AccessToken.jti == token_data.jti).first()
    # Missing row means the token was revoked by a logout
    if access_token is None or access_token.user.email != token_data.email:
        raise unauthorized(ErrorMessageKeys.AUTH_TOKEN_INVALID)

    access_token.last_used_at = datetime.datetime.utcnow()
    db.commit()
    return access_token

def get_current_user(access_token: user_model.AccessToken = Depends(get_current_token)) -> user_model.User:
    return access_token.user
