from typing import List, Dict, Optional

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.services import event_service, match_request_service, withdrawal_service, auth_service
from app.models import profile as profile_model
from app.models.enums import EventType
from app.schemas import event_schemas, match_schemas, match_request_schemas, withdrawal_schemas
from app.api.dependencies import get_db

router = APIRouter()

@router.post("/", response_model=event_schemas.EventRead, status_code=status.HTTP_201_CREATED)
async def create_event_endpoint(
    event_in: event_schemas.EventCreate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return event_service.create_event(db=db, event_in=event_in, organizer_id=current_user.id)

@router.get("/", response_model=List[event_schemas.EventRead])
async def list_events_endpoint(
    search: Optional[str] = None,
    event_type: Optional[EventType] = None,
    city: Optional[str] = None,
    skip: int = 0,
    limit: int = 100,
    db: Session = Depends(get_db),
):
    return event_service.list_events(
        db=db,
        search=search,
        event_type=event_type.value if event_type else None,
        city=city,
        skip=skip,
        limit=limit,
    )

@router.get("/{event_id}", response_model=event_schemas.EventRead)
async def get_event_endpoint(event_id: int, db: Session = Depends(get_db)):
    event = event_service.get_event(db=db, event_id=event_id)
    if not event:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event not found")
    return event

@router.put("/{event_id}", response_model=event_schemas.EventRead)
async def update_event_endpoint(
    event_id: int,
    event_in: event_schemas.EventUpdate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return event_service.update_event(db=db, event_id=event_id, event_update=event_in, current_user_id=current_user.id)

@router.delete("/{event_id}", response_model=Dict[str, str])
async def delete_event_endpoint(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    event_service.delete_event(db=db, event_id=event_id, current_user_id=current_user.id)
    return {"message": "Event deleted successfully"}

@router.post("/{event_id}/matches", response_model=match_schemas.MatchRead, status_code=status.HTTP_201_CREATED)
async def add_match_endpoint(
    event_id: int,
    match_in: match_schemas.MatchCreate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return event_service.add_match(db=db, event_id=event_id, match_in=match_in, current_user_id=current_user.id)

@router.get("/{event_id}/requests", response_model=List[match_request_schemas.MatchRequestRead])
async def list_pending_requests_endpoint(
    event_id: int,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user), # organizer only
):
    return match_request_service.list_pending_requests(db=db, event_id=event_id, organizer_id=current_user.id)

@router.get("/{event_id}/withdrawals", response_model=List[withdrawal_schemas.WithdrawalRead])
async def list_event_withdrawals_endpoint(event_id: int, db: Session = Depends(get_db)):
    event_service.get_event_or_404(db, event_id)
    return withdrawal_service.list_withdrawals(db=db, event_id=event_id)
