import os

# Settings are read at import time; keep hashing cheap and never touch a file database
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("LOG_JSON", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies import get_db
from app.main import app
from app.models import init_db
from app.models.enums import TournamentFormat, TournamentStatus
from app.schemas import tournament_schemas, user_schemas
from app.services import tournament_service, user_service


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


# --- Service-level factories ---

@pytest.fixture
def make_user(db):
    counter = {"n": 0}

    def _make_user(email=None, password="password123", full_name="Test User"):
        counter["n"] += 1
        email = email or f"user{counter['n']}@example.com"
        return user_service.create_user(
            db, user_schemas.UserCreate(full_name=full_name, email=email, password=password)
        )

    return _make_user


@pytest.fixture
def make_tournament(db):
    def _make_tournament(creator, status=TournamentStatus.REGISTRATION_OPEN, **overrides):
        data = {
            "name": "Spring Cup",
            "game_type": "FIFA",
            "format": TournamentFormat.SINGLE_ELIMINATION,
        }
        data.update(overrides)
        tournament = tournament_service.create_tournament(
            db, tournament_schemas.TournamentCreate(**data), creator_id=creator.id
        )
        if status != TournamentStatus.DRAFT:
            tournament = tournament_service.update_tournament(
                db, tournament.id, tournament_schemas.TournamentUpdate(status=status), creator.id
            )
        return tournament

    return _make_tournament


# --- HTTP-level helpers ---

@pytest.fixture
def register_user(client):
    counter = {"n": 0}

    def _register_user(email=None, password="password123", full_name="Test User"):
        counter["n"] += 1
        email = email or f"player{counter['n']}@example.com"
        response = client.post(
            "/api/auth/register",
            json={"full_name": full_name, "email": email, "password": password},
        )
        assert response.status_code == 201, response.text
        data = response.json()["data"]
        return data["user"], {"Authorization": f"Bearer {data['token']['token']}"}

    return _register_user


@pytest.fixture
def create_tournament(client):
    def _create_tournament(headers, open_registration=True, **overrides):
        payload = {"name": "Spring Cup", "game_type": "FIFA", "format": "single_elimination"}
        payload.update(overrides)
        response = client.post("/api/tournaments", json=payload, headers=headers)
        assert response.status_code == 201, response.text
        tournament = response.json()["data"]
        if open_registration:
            response = client.put(
                f"/api/tournaments/{tournament['id']}",
                json={"status": "registration_open"},
                headers=headers,
            )
            assert response.status_code == 200, response.text
            tournament = response.json()["data"]
        return tournament

    return _create_tournament
