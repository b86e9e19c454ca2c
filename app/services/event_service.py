import logging
from typing import List, Optional

from sqlalchemy import or_
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import ForbiddenError, NotFoundError
from app.models import event as event_model
from app.models import match as match_model
from app.models import competitor as competitor_model
from app.schemas import event_schemas, match_schemas

logger = logging.getLogger(__name__)


def get_event(db: Session, event_id: int) -> Optional[event_model.Event]:
    return db.query(event_model.Event).options(
        selectinload(event_model.Event.matches)
        .selectinload(match_model.Match.competitors)
        .selectinload(competitor_model.Competitor.user)
    ).filter(event_model.Event.id == event_id).first()

def get_event_or_404(db: Session, event_id: int) -> event_model.Event:
    event = get_event(db, event_id)
    if not event:
        raise NotFoundError("Event", event_id)
    return event

def get_match(db: Session, match_id: int) -> Optional[match_model.Match]:
    return db.query(match_model.Match).filter(match_model.Match.id == match_id).first()

def get_match_or_404(db: Session, match_id: int) -> match_model.Match:
    match = get_match(db, match_id)
    if not match:
        raise NotFoundError("Match", match_id)
    return match

def ensure_organizer(event: event_model.Event, user_id: int, action: str) -> None:
    """Raise 403 unless user_id created the event."""
    if event.user_id != user_id:
        logger.warning(
            f"User {user_id} tried to {action} without being the organizer",
            extra={"event_id": event.id, "user_id": user_id},
        )
        raise ForbiddenError(f"Only the event organizer can {action}")


def create_event(db: Session, event_in: event_schemas.EventCreate, organizer_id: int) -> event_model.Event:
    data = event_in.model_dump(exclude={"matches"})
    db_event = event_model.Event(**data, user_id=organizer_id)
    for match_in in event_in.matches:
        db_event.matches.append(match_model.Match(**match_in.model_dump()))
    db.add(db_event)
    db.commit()
    db.refresh(db_event)
    logger.info(f"Event {db_event.id} created by user {organizer_id} with {len(event_in.matches)} matches")
    return db_event

def list_events(
    db: Session,
    search: Optional[str] = None,
    event_type: Optional[str] = None,
    city: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
) -> List[event_model.Event]:
    query = db.query(event_model.Event)
    if search:
        pattern = f"%{search}%"
        query = query.filter(
            or_(
                event_model.Event.title.ilike(pattern),
                event_model.Event.description.ilike(pattern),
                event_model.Event.city.ilike(pattern),
                event_model.Event.province.ilike(pattern),
            )
        )
    if event_type:
        query = query.filter(event_model.Event.event_type == event_type)
    if city:
        query = query.filter(event_model.Event.city.ilike(city))
    return query.order_by(event_model.Event.event_date.asc()).offset(skip).limit(limit).all()

def update_event(db: Session, event_id: int, event_update: event_schemas.EventUpdate, current_user_id: int) -> event_model.Event:
    db_event = get_event_or_404(db, event_id)
    ensure_organizer(db_event, current_user_id, "update this event")

    update_data = event_update.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_event, key, value)

    db.commit()
    db.refresh(db_event)
    logger.info(f"Event {event_id} updated fields {sorted(update_data)}")
    return db_event

def delete_event(db: Session, event_id: int, current_user_id: int) -> bool:
    db_event = get_event_or_404(db, event_id)
    ensure_organizer(db_event, current_user_id, "delete this event")
    # Matches, competitors and requests go with it (ORM cascade)
    db.delete(db_event)
    db.commit()
    logger.info(f"Event {event_id} deleted by user {current_user_id}")
    return True


def add_match(db: Session, event_id: int, match_in: match_schemas.MatchCreate, current_user_id: int) -> match_model.Match:
    db_event = get_event_or_404(db, event_id)
    ensure_organizer(db_event, current_user_id, "add matches")

    db_match = match_model.Match(**match_in.model_dump(), event_id=event_id)
    db.add(db_match)
    db.commit()
    db.refresh(db_match)
    logger.info(f"Match {db_match.id} added to event {event_id}")
    return db_match

def update_match(db: Session, match_id: int, match_update: match_schemas.MatchUpdate, current_user_id: int) -> match_model.Match:
    db_match = get_match_or_404(db, match_id)
    ensure_organizer(db_match.event, current_user_id, "edit matches")

    for key, value in match_update.model_dump(exclude_unset=True).items():
        setattr(db_match, key, value)

    db.commit()
    db.refresh(db_match)
    return db_match

def delete_match(db: Session, match_id: int, current_user_id: int) -> bool:
    db_match = get_match_or_404(db, match_id)
    ensure_organizer(db_match.event, current_user_id, "delete matches")
    db.delete(db_match)
    db.commit()
    logger.info(f"Match {match_id} deleted by user {current_user_id}")
    return True
