"""
Competitor request workflow.

A MatchRequest is a user's bid for a slot ("request") or an organizer's
offer of a slot to a user ("invite"). Both kinds share one table and one
lifecycle, see ``MatchRequestStatus``. Accepting a request fills the slot
with a Competitor row; that status change and the insert are committed
together, and the (match, position) uniqueness constraint turns a double
booking into a 409 instead of a second competitor.
"""
import datetime
import logging
from typing import List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from app.core.exceptions import BadRequestError, ConflictError, ForbiddenError, NotFoundError
from app.models import competitor as competitor_model
from app.models import match as match_model
from app.models import match_request as request_model
from app.models import profile as profile_model
from app.models.enums import CompetitorType, MatchRequestStatus, MatchRequestType, MatchStatus
from app.services import event_service

logger = logging.getLogger(__name__)

DEFAULT_REQUEST_MESSAGE = "Request to join match"


def _commit_or_conflict(db: Session, detail: str) -> None:
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"Rolled back conflicting write: {detail} ({e.orig})")
        raise ConflictError(detail)

def _find_request(db: Session, match_id: int, user_id: int, position: int) -> Optional[request_model.MatchRequest]:
    return db.query(request_model.MatchRequest).filter(
        request_model.MatchRequest.match_id == match_id,
        request_model.MatchRequest.user_id == user_id,
        request_model.MatchRequest.competitor_position == position,
    ).first()

def _slot_occupant(db: Session, match_id: int, position: int) -> Optional[competitor_model.Competitor]:
    return db.query(competitor_model.Competitor).filter(
        competitor_model.Competitor.match_id == match_id,
        competitor_model.Competitor.competitor_position == position,
    ).first()

def _check_transition(db_request: request_model.MatchRequest, target: MatchRequestStatus) -> None:
    current = MatchRequestStatus(db_request.status)
    if not current.can_transition_to(target):
        raise ConflictError(f"Request {db_request.id} is {current.value} and cannot become {target.value}")

def _reopen(db_request: request_model.MatchRequest, request_type: MatchRequestType, message: Optional[str]) -> None:
    _check_transition(db_request, MatchRequestStatus.PENDING)
    db_request.status = MatchRequestStatus.PENDING.value
    db_request.type = request_type.value
    db_request.message = message
    db_request.response_message = None
    db_request.responded_at = None
    db_request.responded_by = None

def _accept(db: Session, db_request: request_model.MatchRequest, responder_id: int) -> request_model.MatchRequest:
    _check_transition(db_request, MatchRequestStatus.ACCEPTED)
    position = db_request.competitor_position
    if _slot_occupant(db, db_request.match_id, position):
        raise ConflictError(f"Position {position} of match {db_request.match_id} is already filled")

    db_request.status = MatchRequestStatus.ACCEPTED.value
    db_request.responded_at = datetime.datetime.utcnow()
    db_request.responded_by = responder_id
    db.add(competitor_model.Competitor(
        match_id=db_request.match_id,
        competitor_position=position,
        competitor_type=CompetitorType.REGISTERED_USER.value,
        user_id=db_request.user_id,
        confirmed=True,
    ))
    # Another approval for the same slot may have landed since the check above
    _commit_or_conflict(db, f"Position {position} of match {db_request.match_id} is already filled")
    db.refresh(db_request)
    logger.info(
        f"Request {db_request.id} accepted by user {responder_id}: "
        f"user {db_request.user_id} fills position {position} of match {db_request.match_id}"
    )
    return db_request

def _decline(
    db: Session,
    db_request: request_model.MatchRequest,
    responder_id: int,
    response_message: Optional[str] = None,
) -> request_model.MatchRequest:
    _check_transition(db_request, MatchRequestStatus.REJECTED)
    db_request.status = MatchRequestStatus.REJECTED.value
    db_request.responded_at = datetime.datetime.utcnow()
    db_request.responded_by = responder_id
    db_request.response_message = response_message
    db.commit()
    db.refresh(db_request)
    logger.info(
        f"Request {db_request.id} rejected by user {responder_id}",
        extra={"match_id": db_request.match_id, "user_id": db_request.user_id},
    )
    return db_request


def get_request(db: Session, request_id: int) -> Optional[request_model.MatchRequest]:
    return db.query(request_model.MatchRequest).filter(request_model.MatchRequest.id == request_id).first()

def get_request_or_404(db: Session, request_id: int) -> request_model.MatchRequest:
    db_request = get_request(db, request_id)
    if not db_request:
        raise NotFoundError("Match request", request_id)
    return db_request


def submit_request(
    db: Session,
    match_id: int,
    user_id: int,
    position: int,
    message: Optional[str] = None,
) -> request_model.MatchRequest:
    """
    Ask for a slot in a match.

    Only events with open requests accept these; otherwise slots are filled
    by invite. A rejected or withdrawn request for the same slot is reopened
    instead of duplicated. An already filled slot can still be requested:
    the conflict surfaces when someone tries to approve it.
    """
    db_match = event_service.get_match_or_404(db, match_id)
    if not db_match.event.allow_open_requests:
        raise ForbiddenError("This event does not accept open requests, slots are filled by invite")

    message = message or DEFAULT_REQUEST_MESSAGE
    existing = _find_request(db, match_id, user_id, position)
    if existing:
        if existing.status == MatchRequestStatus.PENDING.value:
            raise ConflictError("You already have a pending request for this position")
        if existing.status == MatchRequestStatus.ACCEPTED.value:
            raise ConflictError("You already have a request for this position")
        _reopen(existing, MatchRequestType.REQUEST, message)
        db_request = existing
        logger.info(f"Request {existing.id} reopened by user {user_id}")
    else:
        db_request = request_model.MatchRequest(
            match_id=match_id,
            user_id=user_id,
            competitor_position=position,
            status=MatchRequestStatus.PENDING.value,
            type=MatchRequestType.REQUEST.value,
            message=message,
        )
        db.add(db_request)

    _commit_or_conflict(db, "You already have a request for this position")
    db.refresh(db_request)
    logger.info(f"User {user_id} requested position {position}", extra={"match_id": match_id, "user_id": user_id})
    return db_request

def send_invite(
    db: Session,
    match_id: int,
    organizer_id: int,
    target_user_id: int,
    position: int,
    message: Optional[str] = "",
) -> request_model.MatchRequest:
    db_match = event_service.get_match_or_404(db, match_id)
    event_service.ensure_organizer(db_match.event, organizer_id, "send invites")

    target = db.query(profile_model.Profile).filter(profile_model.Profile.id == target_user_id).first()
    if not target:
        raise NotFoundError("Profile", target_user_id)

    existing = _find_request(db, match_id, target_user_id, position)
    if existing:
        if existing.status in (MatchRequestStatus.PENDING.value, MatchRequestStatus.ACCEPTED.value):
            raise ConflictError(f"User {target_user_id} already has a {existing.status} {existing.type} for this position")
        _reopen(existing, MatchRequestType.INVITE, message)
        db_request = existing
    else:
        db_request = request_model.MatchRequest(
            match_id=match_id,
            user_id=target_user_id,
            competitor_position=position,
            status=MatchRequestStatus.PENDING.value,
            type=MatchRequestType.INVITE.value,
            message=message,
        )
        db.add(db_request)

    _commit_or_conflict(db, f"User {target_user_id} already has a request for this position")
    db.refresh(db_request)
    logger.info(f"Organizer {organizer_id} invited user {target_user_id} to position {position} of match {match_id}")
    return db_request

def approve_request(db: Session, request_id: int, responder_id: int) -> request_model.MatchRequest:
    db_request = get_request_or_404(db, request_id)
    event_service.ensure_organizer(db_request.match.event, responder_id, "approve requests")
    return _accept(db, db_request, responder_id)

def reject_request(
    db: Session,
    request_id: int,
    responder_id: int,
    response_message: Optional[str] = None,
) -> request_model.MatchRequest:
    db_request = get_request_or_404(db, request_id)
    event_service.ensure_organizer(db_request.match.event, responder_id, "reject requests")
    return _decline(db, db_request, responder_id, response_message)

def respond_to_invite(db: Session, request_id: int, user_id: int, accept: bool) -> request_model.MatchRequest:
    """The invited user takes or turns down the offered slot."""
    db_request = get_request_or_404(db, request_id)
    if db_request.type != MatchRequestType.INVITE.value:
        raise BadRequestError("Only invites can be answered by the invited user")
    if db_request.user_id != user_id:
        raise ForbiddenError("This invite was sent to another user")
    if accept:
        return _accept(db, db_request, user_id)
    return _decline(db, db_request, user_id)

def cancel_invite(db: Session, request_id: int, organizer_id: int) -> bool:
    db_request = get_request_or_404(db, request_id)
    event_service.ensure_organizer(db_request.match.event, organizer_id, "cancel invites")
    if db_request.type != MatchRequestType.INVITE.value:
        raise ConflictError("Only invites can be cancelled; reject the request instead")
    if db_request.status == MatchRequestStatus.ACCEPTED.value:
        raise ConflictError("Invite was already accepted; remove the competitor instead")

    db.delete(db_request)
    db.commit()
    logger.info(f"Invite {request_id} cancelled by organizer {organizer_id}")
    return True

def remove_competitor(db: Session, match_id: int, competitor_id: int, organizer_id: int) -> bool:
    """Free a slot: drop the competitor and the request that put them there, together."""
    db_match = event_service.get_match_or_404(db, match_id)
    event_service.ensure_organizer(db_match.event, organizer_id, "remove competitors")
    # The recorded result refers to these slots
    if db_match.status == MatchStatus.COMPLETED.value:
        raise ConflictError(f"Match {match_id} is completed; its competitors can no longer change")

    competitor =db.query(competitor_model.Competitor).filter(
        competitor_model.Competitor.id == competitor_id,
        competitor_model.Competitor.match_id == match_id,
    ).first()
    if not competitor:
        raise NotFoundError("Competitor", competitor_id)

    if competitor.user_id is not None:
        db_request = _find_request(db, match_id, competitor.user_id, competitor.competitor_position)
        if db_request:
            db.delete(db_request)
    db.delete(competitor)
    db.commit()
    logger.info(f"Competitor {competitor_id} removed from match {match_id} by organizer {organizer_id}")
    return True

def add_manual_competitor(
    db: Session,
    match_id: int,
    organizer_id: int,
    position: int,
    name: str,
    belt: Optional[str] = None,
    weight: Optional[float] = None,
) -> competitor_model.Competitor:
    """Fill a slot with someone who has no profile."""
    db_match = event_service.get_match_or_404(db, match_id)
    event_service.ensure_organizer(db_match.event, organizer_id, "add competitors")
    if _slot_occupant(db, match_id, position):
        raise ConflictError(f"Position {position} of match {match_id} is already filled")

    competitor = competitor_model.Competitor(
        match_id=match_id,
        competitor_position=position,
        competitor_type=CompetitorType.MANUAL_ENTRY.value,
        manual_name=name,
        manual_belt=belt,
        manual_weight=weight,
        confirmed=False,
    )
    db.add(competitor)
    _commit_or_conflict(db, f"Position {position} of match {match_id} is already filled")
    db.refresh(competitor)
    return competitor

def confirm_match(db: Session, match_id: int, organizer_id: int) -> match_model.Match:
    """Lock in the pairing. Does not check how many slots are filled."""
    db_match = event_service.get_match_or_404(db, match_id)
    event_service.ensure_organizer(db_match.event, organizer_id, "confirm matches")

    db_match.status = MatchStatus.CONFIRMED.value
    for competitor in db_match.competitors:
        competitor.confirmed = True
    db.commit()
    db.refresh(db_match)
    logger.info(f"Match confirmed with {len(db_match.competitors)} competitors", extra={"match_id": match_id})
    return db_match


def list_pending_requests(db: Session, event_id: int, organizer_id: int) -> List[request_model.MatchRequest]:
    db_event = event_service.get_event_or_404(db, event_id)
    event_service.ensure_organizer(db_event, organizer_id, "view requests")
    return db.query(request_model.MatchRequest)\
        .join(match_model.Match, match_model.Match.id == request_model.MatchRequest.match_id)\
        .options(selectinload(request_model.MatchRequest.user))\
        .filter(
            match_model.Match.event_id == event_id,
            request_model.MatchRequest.status == MatchRequestStatus.PENDING.value,
        )\
        .order_by(request_model.MatchRequest.created_at.desc(), request_model.MatchRequest.id.desc())\
        .all()

def list_user_invites(db: Session, user_id: int) -> List[request_model.MatchRequest]:
    return db.query(request_model.MatchRequest)\
        .filter(
            request_model.MatchRequest.user_id == user_id,
            request_model.MatchRequest.type == MatchRequestType.INVITE.value,
            request_model.MatchRequest.status == MatchRequestStatus.PENDING.value,
        )\
        .order_by(request_model.MatchRequest.created_at.desc())\
        .all()
