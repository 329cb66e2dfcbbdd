from app.core.database import Base, engine

# Import all models here to ensure they are registered with Base
from .user import User, AccessToken
from .tournament import Tournament
from .team import Team, TeamMembership
from .participant import TournamentParticipant
from .match import Match

def init_db(bind=engine) -> None:
    # Migrations are out of scope; the schema is created straight from the models.
    Base.metadata.create_all(bind=bind)
