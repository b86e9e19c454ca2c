from app.core.database import Base

# Import all models here to ensure they are registered with Base
from .profile import Profile
from .event import Event
from .match import Match
from .competitor import Competitor
from .match_request import MatchRequest
from .withdrawal import Withdrawal
from .competition import CompetitionEntry
from .technique import Technique

# Tables are created by app.core.database.init_db() on startup.
