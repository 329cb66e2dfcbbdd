from pydantic import BaseModel
from typing import Literal, Optional

from .user_schemas import UserRead

class Token(BaseModel):
    type: Literal["bearer"] = "bearer"
    token: str

class TokenData(BaseModel):
    # Email identifies the user, jti identifies the issued token row
    email: Optional[str] = None
    jti: Optional[str] = None

class AuthPayload(BaseModel):
    user: UserRead
    token: Token
