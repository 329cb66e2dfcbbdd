from typing import Any, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")

class TranslationMessage(BaseModel):
    key: str
    params: Dict[str, Any] = Field(default_factory=dict)

class ValidationErrorItem(BaseModel):
    field: str
    rule: str
    message: TranslationMessage

class ApiResponse(BaseModel, Generic[T]):
    success: bool = True
    message: Optional[TranslationMessage] = None
    data: Optional[T] = None
    errors: Optional[List[ValidationErrorItem]] = None

class PageMeta(BaseModel):
    total: int
    per_page: int
    current_page: int
    last_page: int
    first_page: int = 1

class Page(BaseModel, Generic[T]):
    meta: PageMeta
    data: List[T]
