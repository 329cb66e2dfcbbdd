import datetime

from fastapi import APIRouter

router = APIRouter(tags=["Health"])

@router.get("/health")
async def health() -> dict:
    timestamp = datetime.datetime.now(datetime.timezone.utc).isoformat().replace("+00:00", "Z")
    return {"status": "healthy", "timestamp": timestamp}
