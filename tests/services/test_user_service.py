import pytest
from unittest.mock import patch

from app.core import security
from app.core.exceptions import ConflictError, UnauthorizedError
from app.models.competition import CompetitionEntry
from app.schemas import user_schemas
from app.services import auth_service, user_service


GOOGLE_CLAIMS = {
    "sub": "google-new-user",
    "email": "carla@example.com",
    "name": "Carla Gracie",
    "picture": "https://example.com/carla.png",
}


class TestUserService:

    def test_create_and_lookup(self, db_session):
        profile = user_service.create_profile(db_session, user_schemas.ProfileCreate(
            email="rafa@example.com", google_id="google-rafa", first_name="Rafa",
        ))

        assert profile.belt_level == "White"
        assert user_service.get_profile_by_email(db_session, "rafa@example.com").id == profile.id
        assert user_service.get_profile_by_google_id(db_session, "google-rafa").id == profile.id
        assert user_service.get_profile(db_session, profile.id + 100) is None

    def test_duplicate_email(self, db_session, athlete):
        with pytest.raises(ConflictError):
            user_service.create_profile(db_session, user_schemas.ProfileCreate(
                email=athlete.email, google_id="google-other",
            ))

    def test_update_profile(self, db_session, athlete, other_athlete):
        updated = user_service.update_profile(
            db_session, athlete, user_schemas.ProfileUpdate(belt_level="Purple", username="ana_purple")
        )
        assert updated.belt_level == "Purple"
        assert updated.username == "ana_purple"
        assert updated.first_name == "Ana"

        with pytest.raises(ConflictError):
            user_service.update_profile(db_session, athlete, user_schemas.ProfileUpdate(username=other_athlete.username))

    def test_search_profiles(self, db_session, organizer, athlete, other_athlete):
        assert [p.username for p in user_service.search_profiles(db_session, "BRUN")] == ["athlete_b"]
        assert len(user_service.search_profiles(db_session, "silva")) == 3
        assert len(user_service.search_profiles(db_session, "silva", limit=2)) == 2

    def test_competition_history(self, db_session, athlete):
        db_session.add(CompetitionEntry(user_id=athlete.id, event_name="Copa Rio", status="competed", result="win"))
        db_session.commit()

        history = user_service.get_competition_history(db_session, athlete.id)

        assert [h.event_name for h in history] == ["Copa Rio"]


class TestGoogleLogin:

    def test_new_user_is_created(self, db_session):
        with patch("app.services.auth_service.id_token.verify_oauth2_token", return_value=GOOGLE_CLAIMS):
            profile = auth_service.verify_google_id_token("id-token", db_session)

        assert profile.email == "carla@example.com"
        assert profile.google_id == "google-new-user"
        assert profile.first_name == "Carla"
        assert profile.last_name == "Gracie"
        assert profile.avatar_url == "https://example.com/carla.png"

    def test_existing_email_is_linked(self, db_session, athlete):
        claims = dict(GOOGLE_CLAIMS, email=athlete.email, sub="google-second-account")
        with patch("app.services.auth_service.id_token.verify_oauth2_token", return_value=claims):
            profile = auth_service.verify_google_id_token("id-token", db_session)

        assert profile.id == athlete.id
        assert profile.google_id == "google-second-account"

    def test_returning_user(self, db_session, athlete):
        claims = dict(GOOGLE_CLAIMS, email=athlete.email, sub=athlete.google_id)
        with patch("app.services.auth_service.id_token.verify_oauth2_token", return_value=claims):
            profile = auth_service.verify_google_id_token("id-token", db_session)

        assert profile.id == athlete.id
        assert profile.avatar_url == "https://example.com/carla.png"

    def test_invalid_google_token(self, db_session):
        with patch("app.services.auth_service.id_token.verify_oauth2_token", side_effect=ValueError("Wrong audience")):
            with pytest.raises(UnauthorizedError):
                auth_service.verify_google_id_token("id-token", db_session)

    def test_access_token_resolves_to_profile(self, db_session, athlete):
        token = security.create_access_token({"sub": athlete.email})
        assert auth_service.get_current_user(token=token, db=db_session).id == athlete.id

    def test_garbage_access_token(self, db_session):
        with pytest.raises(UnauthorizedError):
            auth_service.get_current_user(token="not-a-jwt", db=db_session)
