from typing import Dict, List, Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.services import match_request_service, auth_service
from app.models import profile as profile_model
from app.schemas import match_request_schemas
from app.api.dependencies import get_db

router = APIRouter()

@router.get("/invites", response_model=List[match_request_schemas.MatchRequestRead])
async def list_my_invites_endpoint(
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_request_service.list_user_invites(db=db, user_id=current_user.id)

@router.post("/{request_id}/approve", response_model=match_request_schemas.MatchRequestRead)
async def approve_request_endpoint(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_request_service.approve_request(db=db, request_id=request_id, responder_id=current_user.id)

@router.post("/{request_id}/reject", response_model=match_request_schemas.MatchRequestRead)
async def reject_request_endpoint(
    request_id: int,
    decision: Optional[match_request_schemas.RequestDecision] = None,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_request_service.reject_request(
        db=db,
        request_id=request_id,
        responder_id=current_user.id,
        response_message=decision.response_message if decision else None,
    )

@router.post("/{request_id}/respond", response_model=match_request_schemas.MatchRequestRead)
async def respond_to_invite_endpoint(
    request_id: int,
    decision: match_request_schemas.InviteDecision,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_request_service.respond_to_invite(
        db=db, request_id=request_id, user_id=current_user.id, accept=decision.accept
    )

@router.delete("/{request_id}", response_model=Dict[str, str])
async def cancel_invite_endpoint(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    match_request_service.cancel_invite(db=db, request_id=request_id, organizer_id=current_user.id)
    return {"message": "Invite cancelled"}
