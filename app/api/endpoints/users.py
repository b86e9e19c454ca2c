from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session
from typing import List, Optional

from app.services import auth_service, match_service, user_service, withdrawal_service
from app.models import profile as profile_model
from app.schemas import match_schemas, user_schemas, withdrawal_schemas
from app.api.dependencies import get_db

router = APIRouter()

@router.get("/me", response_model=user_schemas.ProfileRead)
async def read_users_me(
    current_user: profile_model.Profile = Depends(auth_service.get_current_user)
):
    return current_user

@router.patch("/me", response_model=user_schemas.ProfileRead)
async def update_users_me(
    profile_in: user_schemas.ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return user_service.update_profile(db=db, db_profile=current_user, profile_update=profile_in)

@router.get("/me/matches", response_model=List[match_schemas.MatchRead])
async def read_my_matches(
    status: Optional[str] = None,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return match_service.get_user_matches(db=db, user_id=current_user.id, status=status)

@router.get("/search", response_model=List[user_schemas.ProfileRead])
async def search_users(
    q: str = Query(..., min_length=2),
    limit: int = 20,
    db: Session = Depends(get_db),
    current_user: profile_model.Profile = Depends(auth_service.get_current_user),
):
    return user_service.search_profiles(db=db, query=q, limit=limit)

@router.get("/{user_id}", response_model=user_schemas.ProfileRead)
async def read_user(user_id: int, db: Session = Depends(get_db)):
    profile = user_service.get_profile(db, user_id)
    if not profile:
        raise HTTPException(status_code=404, detail="User not found")
    return profile

@router.get("/{user_id}/competitions", response_model=List[user_schemas.CompetitionEntryRead])
async def read_competition_history(user_id: int, db: Session = Depends(get_db)):
    if not user_service.get_profile(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return user_service.get_competition_history(db=db, user_id=user_id)

@router.get("/{user_id}/withdrawals", response_model=List[withdrawal_schemas.WithdrawalRead])
async def read_withdrawal_history(user_id: int, db: Session = Depends(get_db)):
    if not user_service.get_profile(db, user_id):
        raise HTTPException(status_code=404, detail="User not found")
    return withdrawal_service.list_withdrawals(db=db, user_id=user_id)
