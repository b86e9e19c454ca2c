import datetime

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies import get_db
from app.core.database import Base
from app.core.exceptions import UnauthorizedError
from app.main import app
from app.models.competitor import Competitor
from app.models.event import Event
from app.models.match import Match
from app.models.profile import Profile
from app.services import auth_service


@pytest.fixture
def db_session():
    """Fresh in-memory database per test."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


def _make_profile(db, username, first_name):
    profile = Profile(
        email=f"{username}@example.com",
        google_id=f"google-{username}",
        username=username,
        first_name=first_name,
        last_name="Silva",
        belt_level="Blue",
    )
    db.add(profile)
    db.commit()
    db.refresh(profile)
    return profile


@pytest.fixture
def organizer(db_session):
    return _make_profile(db_session, "organizer", "Olga")

@pytest.fixture
def athlete(db_session):
    return _make_profile(db_session, "athlete_a", "Ana")

@pytest.fixture
def other_athlete(db_session):
    return _make_profile(db_session, "athlete_b", "Bruno")


@pytest.fixture
def open_event(db_session, organizer):
    """A superfight card that accepts open requests, with one empty match."""
    event = Event(
        user_id=organizer.id,
        title="Friday Night Superfights",
        event_type="match",
        city="Rio de Janeiro",
        province="RJ",
        country="Brazil",
        event_date=datetime.datetime(2026, 11, 20, 19, 0),
        allow_open_requests=True,
    )
    event.matches.append(Match(belt_level="Blue", gender="male", weight_limit=76.0, match_format="gi"))
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event

@pytest.fixture
def invite_only_event(db_session, organizer):
    event = Event(
        user_id=organizer.id,
        title="Invitational",
        event_type="match",
        city="Sao Paulo",
        allow_open_requests=False,
    )
    event.matches.append(Match(belt_level="Black", match_format="no_gi"))
    db_session.add(event)
    db_session.commit()
    db_session.refresh(event)
    return event

@pytest.fixture
def open_match(open_event):
    return open_event.matches[0]


@pytest.fixture
def slot_competitors(db_session):
    """Competitor rows currently holding (match, position)."""
    def _slot_competitors(match_id, position):
        return db_session.query(Competitor).filter(
            Competitor.match_id == match_id,
            Competitor.competitor_position == position,
        ).all()
    return _slot_competitors


# --- API client ---

@pytest.fixture
def acting_user():
    """Holds the profile the overridden auth dependency resolves to."""
    return {"profile": None}

@pytest.fixture
def client(db_session, acting_user):
    def override_get_db():
        yield db_session

    def override_get_current_user():
        if acting_user["profile"] is None:
            raise UnauthorizedError()
        return acting_user["profile"]

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[auth_service.get_current_user] = override_get_current_user
    yield TestClient(app)
    app.dependency_overrides.clear()

@pytest.fixture
def act_as(acting_user):
    def _act_as(profile):
        acting_user["profile"] = profile
    return _act_as
