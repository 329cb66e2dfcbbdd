from contextlib import asynccontextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from app.api.endpoints import auth as auth_endpoints
from app.api.endpoints import profile as profile_endpoints
from app.api.endpoints import tournaments as tournament_endpoints
from app.api.endpoints import teams as team_endpoints
from app.api.endpoints import matches as match_endpoints
from app.api.endpoints import participants as participant_endpoints
from app.api.endpoints import health as health_endpoints
from app.core.config import settings
from app.core.errors import register_exception_handlers
from app.core.logging import configure_logging
from app.models import init_db

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("application_started", app_name=settings.APP_NAME)
    yield


def create_app() -> FastAPI:
    configure_logging(settings.LOG_LEVEL, settings.LOG_JSON)

    app = FastAPI(title=settings.APP_NAME, version="0.1.0", lifespan=lifespan)
    register_exception_handlers(app)

    prefix = settings.API_PREFIX
    app.include_router(health_endpoints.router)
    app.include_router(auth_endpoints.router, prefix=f"{prefix}/auth", tags=["Authentication"])
    app.include_router(profile_endpoints.router, prefix=f"{prefix}/profile", tags=["Profile"])
    app.include_router(tournament_endpoints.router, prefix=f"{prefix}/tournaments", tags=["Tournaments"])
    app.include_router(team_endpoints.router, prefix=f"{prefix}/teams", tags=["Teams"])
    app.include_router(match_endpoints.router, prefix=f"{prefix}/matches", tags=["Matches"])
    app.include_router(participant_endpoints.router, prefix=f"{prefix}/participants", tags=["Participants"])
    return app


app = create_app()


def run() -> None:
    uvicorn.run("app.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
