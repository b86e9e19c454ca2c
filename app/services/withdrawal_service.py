"""
Withdrawing from a match.

Everything a withdrawal touches is written in one commit: the withdrawal
record, the optional history entry, the freed slot, the user's requests
and the match status reset.
"""
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ConflictError, NotFoundError
from app.models import competition as competition_model
from app.models import competitor as competitor_model
from app.models import match_request as request_model
from app.models import withdrawal as withdrawal_model
from app.models.enums import MatchRequestStatus, MatchStatus
from app.schemas import withdrawal_schemas
from app.services import event_service

logger = logging.getLogger(__name__)


def withdraw_from_match(
    db: Session,
    match_id: int,
    user_id: int,
    withdrawal_in: withdrawal_schemas.WithdrawalCreate,
) -> withdrawal_model.Withdrawal:
    db_match = event_service.get_match_or_404(db, match_id)
    if db_match.status in (MatchStatus.COMPLETED.value, MatchStatus.CANCELLED.value):
        raise ConflictError(f"Match {match_id} is {db_match.status}; there is nothing to withdraw from")
    event = db_match.event

    competitor = db.query(competitor_model.Competitor).filter(
        competitor_model.Competitor.match_id == match_id,
        competitor_model.Competitor.user_id == user_id,
    ).first()
    pending_requests = db.query(request_model.MatchRequest).filter(
        request_model.MatchRequest.match_id == match_id,
        request_model.MatchRequest.user_id == user_id,
        request_model.MatchRequest.status == MatchRequestStatus.PENDING.value,
    ).all()
    if not competitor and not pending_requests:
        raise NotFoundError("Participation of user in match", f"{user_id}/{match_id}")

    withdrawal = withdrawal_model.Withdrawal(
        user_id=user_id,
        event_id=event.id,
        match_id=match_id,
        reason=withdrawal_in.reason,
        comment=withdrawal_in.comment,
    )
    db.add(withdrawal)

    # Backing out of a confirmed match goes on the record
    if db_match.status == MatchStatus.CONFIRMED.value:
        notes = withdrawal_in.reason
        if withdrawal_in.comment:
            notes = f"{notes}: {withdrawal_in.comment}"
        db.add(competition_model.CompetitionEntry(
            user_id=user_id,
            event_name=event.title,
            competition_date=event.event_date.date() if event.event_date else None,
            city=event.city,
            state=event.province,
            country=event.country,
            status="withdrew",
            match_type="single",
            result=None,
            notes=notes,
        ))

    if competitor:
        accepted = db.query(request_model.MatchRequest).filter(
            request_model.MatchRequest.match_id == match_id,
            request_model.MatchRequest.user_id == user_id,
            request_model.MatchRequest.competitor_position == competitor.competitor_position,
        ).first()
        if accepted:
            db.delete(accepted)
        db.delete(competitor)

    for db_request in pending_requests:
        db_request.status = MatchRequestStatus.WITHDRAWN.value

    # The organizer has to reconfirm whoever fills the slot next
    db_match.status = MatchStatus.PENDING.value

    db.commit()
    db.refresh(withdrawal)
    logger.info(
        f"User {user_id} withdrew from match {match_id} ({withdrawal_in.reason})",
        extra={"event_id": event.id, "match_id": match_id, "user_id": user_id},
    )
    return withdrawal

def list_withdrawals(
    db: Session,
    user_id: Optional[int] = None,
    event_id: Optional[int] = None,
    match_id: Optional[int] = None,
) -> List[withdrawal_model.Withdrawal]:
    query = db.query(withdrawal_model.Withdrawal)
    if user_id is not None:
        query = query.filter(withdrawal_model.Withdrawal.user_id == user_id)
    if event_id is not None:
        query = query.filter(withdrawal_model.Withdrawal.event_id == event_id)
    if match_id is not None:
        query = query.filter(withdrawal_model.Withdrawal.match_id == match_id)
    return query.order_by(withdrawal_model.Withdrawal.created_at.desc()).all()
