from typing import Optional

from fastapi import Query
from app.core.database import SessionLocal

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

class Pagination:
    """``page``/``limit`` query parameters shared by the list endpoints."""

    def __init__(self, default_limit: int = 10, max_limit: int = 100):
        self.default_limit = default_limit
        self.max_limit = max_limit

    def __call__(self, page: int = Query(1, ge=1), limit: Optional[int] = Query(None, ge=1)) -> dict:
        if limit is None:
            limit = self.default_limit
        return {"page": page, "limit": min(limit, self.max_limit)}
