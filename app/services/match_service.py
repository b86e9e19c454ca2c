import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.models import competitor as competitor_model
from app.models import match as match_model
from app.models.enums import MatchStatus
from app.schemas import match_schemas
from app.services import event_service

logger = logging.getLogger(__name__)


def get_match_details(db: Session, match_id: int) -> Optional[match_model.Match]:
    return event_service.get_match(db, match_id)

def get_event_matches(db: Session, event_id: int) -> List[match_model.Match]:
    event = event_service.get_event(db, event_id)
    if not event:
        raise NotFoundError("Event", event_id)
    return event.matches

def get_user_matches(db: Session, user_id: int, status: Optional[str] = None) -> List[match_model.Match]:
    """Matches in which the user holds a slot."""
    query = db.query(match_model.Match)\
        .join(competitor_model.Competitor, competitor_model.Competitor.match_id == match_model.Match.id)\
        .filter(competitor_model.Competitor.user_id == user_id)
    if status:
        query = query.filter(match_model.Match.status == status)
    return query.order_by(match_model.Match.created_at.desc()).all()

def record_result(
    db: Session,
    match_id: int,
    result: match_schemas.MatchResultUpdate,
    current_user_id: int,
) -> match_model.Match:
    db_match = event_service.get_match_or_404(db, match_id)
    event_service.ensure_organizer(db_match.event, current_user_id, "record results")

    if db_match.status not in (MatchStatus.CONFIRMED.value, MatchStatus.COMPLETED.value):
        raise ConflictError(f"Match {match_id} is {db_match.status}; only confirmed matches can receive a result")

    update_data = result.model_dump(exclude_unset=True)
    for key, value in update_data.items():
        setattr(db_match, key, value)
    db_match.status = MatchStatus.COMPLETED.value

    db.commit()
    db.refresh(db_match)
    logger.info(f"Result {db_match.result} recorded for match {match_id}")
    return db_match

def cancel_match(db: Session, match_id: int, current_user_id: int) -> match_model.Match:
    db_match = event_service.get_match_or_404(db, match_id)
    event_service.ensure_organizer(db_match.event, current_user_id, "cancel matches")
    if db_match.status == MatchStatus.COMPLETED.value:
        raise ConflictError(f"Match {match_id} is already completed")
    db_match.status = MatchStatus.CANCELLED.value
    db.commit()
    db.refresh(db_match)
    logger.info(f"Match {match_id} cancelled")
    return db_match
