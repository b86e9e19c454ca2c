import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError
from app.models import competition as competition_model
from app.models import profile as profile_model
from app.schemas import user_schemas

logger = logging.getLogger(__name__)


def get_profile(db: Session, user_id: int) -> Optional[profile_model.Profile]:
    return db.query(profile_model.Profile).filter(profile_model.Profile.id == user_id).first()

def get_profile_by_email(db: Session, email: str) -> Optional[profile_model.Profile]:
    return db.query(profile_model.Profile).filter(profile_model.Profile.email == email).first()

def get_profile_by_google_id(db: Session, google_id: str) -> Optional[profile_model.Profile]:
    return db.query(profile_model.Profile).filter(profile_model.Profile.google_id == google_id).first()

def create_profile(db: Session, profile_in: user_schemas.ProfileCreate) -> profile_model.Profile:
    if get_profile_by_email(db, profile_in.email):
        raise ConflictError(f"Profile with email {profile_in.email} already exists")
    db_profile = profile_model.Profile(**profile_in.model_dump())
    db.add(db_profile)
    db.commit()
    db.refresh(db_profile)
    logger.info(f"Profile {db_profile.id} created")
    return db_profile

def update_profile(db: Session, db_profile: profile_model.Profile, profile_update: user_schemas.ProfileUpdate) -> profile_model.Profile:
    update_data = profile_update.model_dump(exclude_unset=True)
    username = update_data.get("username")
    if username and username != db_profile.username:
        taken = db.query(profile_model.Profile).filter(
            profile_model.Profile.username == username,
            profile_model.Profile.id != db_profile.id,
        ).first()
        if taken:
            raise ConflictError(f"Username {username} is already taken")

    for key, value in update_data.items():
        setattr(db_profile, key, value)
    db.commit()
    db.refresh(db_profile)
    return db_profile

def search_profiles(db: Session, query: str, limit: int = 20) -> List[profile_model.Profile]:
    """Name/username lookup used when an organizer picks someone to invite."""
    pattern = f"%{query}%"
    return db.query(profile_model.Profile).filter(
        or_(
            profile_model.Profile.first_name.ilike(pattern),
            profile_model.Profile.last_name.ilike(pattern),
            profile_model.Profile.username.ilike(pattern),
        )
    ).order_by(profile_model.Profile.username).limit(limit).all()

def get_competition_history(db: Session, user_id: int) -> List[competition_model.CompetitionEntry]:
    return db.query(competition_model.CompetitionEntry)\
        .filter(competition_model.CompetitionEntry.user_id == user_id)\
        .order_by(competition_model.CompetitionEntry.competition_date.desc())\
        .all()
