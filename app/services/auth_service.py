import logging
from typing import Optional

from fastapi import Depends
from sqlalchemy.orm import Session

from google.oauth2 import id_token
from google.auth.transport import requests as google_requests

from app.api.dependencies import get_db
from app.core import security
from app.core.config import settings
from app.core.exceptions import BadRequestError, UnauthorizedError
from app.models import profile as profile_model
from app.schemas import user_schemas
from app.services import user_service

logger = logging.getLogger(__name__)


def _split_name(name: Optional[str]):
    if not name:
        return None, None
    first, _, last = name.partition(" ")
    return first, last or None

def verify_google_id_token(token: str, db: Session) -> profile_model.Profile:
    try:
        idinfo = id_token.verify_oauth2_token(
            token, google_requests.Request(), settings.GOOGLE_CLIENT_ID
        )
    except ValueError as e:
        logger.warning(f"Rejected Google ID token: {e}")
        raise UnauthorizedError(f"Invalid Google ID token: {e}")

    email = idinfo.get("email")
    google_id = idinfo.get("sub") # 'sub' is the standard field for Google ID
    first_name, last_name = _split_name(idinfo.get("name"))
    avatar_url = idinfo.get("picture")

    if not email or not google_id:
        raise BadRequestError("Email or Google ID missing from token payload")

    profile = user_service.get_profile_by_google_id(db, google_id)
    if profile:
        if profile.avatar_url != avatar_url:
            profile.avatar_url = avatar_url
            db.commit()
            db.refresh(profile)
        return profile

    # Signed up differently before: link the Google account to the profile
    profile = user_service.get_profile_by_email(db, email)
    if profile:
        profile.google_id = google_id
        profile.avatar_url = avatar_url or profile.avatar_url
        db.commit()
        db.refresh(profile)
        logger.info(f"Linked Google account to profile {profile.id}")
        return profile

    return user_service.create_profile(db, user_schemas.ProfileCreate(
        email=email,
        google_id=google_id,
        first_name=first_name,
        last_name=last_name,
        avatar_url=avatar_url,
    ))


def get_current_user(token: str = Depends(security.oauth2_scheme), db: Session = Depends(get_db)) -> profile_model.Profile:
    """Resolve the bearer token to the acting profile; handlers pass its id on explicitly."""
    credentials_exception = UnauthorizedError()
    token_data = security.verify_token(token, credentials_exception)

    profile = user_service.get_profile_by_email(db, token_data.email)
    if profile is None:
        raise credentials_exception
    return profile
