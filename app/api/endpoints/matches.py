from typing import Dict

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.services import event_service, match_service, match_request_service, withdrawal_service, auth_service
from app.models import profile as profile_model
from app.schemas import match_schemas, match_request_schemas, withdrawal_schemas
from app.api.dependencies import get_db

router = APIRouter()

@router.get("/{match_id}", response_model=match_schemas.MatchRead)
async def get_match_details_endpoint(match_id: int, db: Session = Depends(get_db)):
    match = match_service.get_match_details(db=db, match_id=match_id)
    if not match:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Match not found")
    return match

@router.patch("/{match_id}", response_model=match_schemas.MatchRead)
async def update_match_endpoint(
    match_id: int,
    match_in: match_schemas.MatchUpdate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return event_service.update_match(db=db, match_id=match_id, match_update=match_in, current_user_id=current_user.id)

@router.delete("/{match_id}", response_model=Dict[str, str])
async def delete_match_endpoint(
    match_id: int,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    event_service.delete_match(db=db, match_id=match_id, current_user_id=current_user.id)
    return {"message": "Match deleted successfully"}

# --- Slot requests and invites ---

@router.post("/{match_id}/requests", response_model=match_request_schemas.MatchRequestRead, status_code=status.HTTP_201_CREATED)
async def submit_request_endpoint(
    match_id: int,
    request_in: match_request_schemas.MatchRequestCreate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_request_service.submit_request(
        db=db,
        match_id=match_id,
        user_id=current_user.id,
        position=request_in.competitor_position,
        message=request_in.message,
    )

@router.post("/{match_id}/invites", response_model=match_request_schemas.MatchRequestRead, status_code=status.HTTP_201_CREATED)
async def send_invite_endpoint(
    match_id: int,
    invite_in: match_request_schemas.InviteCreate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_request_service.send_invite(
        db=db,
        match_id=match_id,
        organizer_id=current_user.id,
        target_user_id=invite_in.user_id,
        position=invite_in.competitor_position,
        message=invite_in.message,
    )

# --- Competitors ---

@router.post("/{match_id}/competitors", response_model=match_schemas.CompetitorRead, status_code=status.HTTP_201_CREATED)
async def add_manual_competitor_endpoint(
    match_id: int,
    competitor_in: match_schemas.ManualCompetitorCreate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_request_service.add_manual_competitor(
        db=db,
        match_id=match_id,
        organizer_id=current_user.id,
        position=competitor_in.competitor_position,
        name=competitor_in.manual_name,
        belt=competitor_in.manual_belt,
        weight=competitor_in.manual_weight,
    )

@router.delete("/{match_id}/competitors/{competitor_id}", response_model=Dict[str, str])
async def remove_competitor_endpoint(
    match_id: int,
    competitor_id: int,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    match_request_service.remove_competitor(
        db=db, match_id=match_id, competitor_id=competitor_id, organizer_id=current_user.id
    )
    return {"message": "Competitor removed"}

# --- Match lifecycle ---

@router.post("/{match_id}/confirm", response_model=match_schemas.MatchRead)
async def confirm_match_endpoint(
    match_id: int,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_request_service.confirm_match(db=db, match_id=match_id, organizer_id=current_user.id)

@router.post("/{match_id}/result", response_model=match_schemas.MatchRead)
async def record_result_endpoint(
    match_id: int,
    result_in: match_schemas.MatchResultUpdate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_service.record_result(db=db, match_id=match_id, result=result_in, current_user_id=current_user.id)

@router.post("/{match_id}/cancel", response_model=match_schemas.MatchRead)
async def cancel_match_endpoint(
    match_id: int,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_service.cancel_match(db=db, match_id=match_id, current_user_id=current_user.id)

@router.post("/{match_id}/withdraw", response_model=withdrawal_schemas.WithdrawalRead, status_code=status.HTTP_201_CREATED)
async def withdraw_endpoint(
    match_id: int,
    withdrawal_in: withdrawal_schemas.WithdrawalCreate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return withdrawal_service.withdraw_from_match(
        db=db, match_id=match_id, user_id=current_user.id, withdrawal_in=withdrawal_in
    )
