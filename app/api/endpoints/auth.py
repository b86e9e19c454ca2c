from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from datetime import timedelta

from app.services import auth_service
from app.core import security
from app.core.config import settings
from app.schemas import auth_schemas
from app.api.dependencies import get_db

router = APIRouter()

@router.post("/login", response_model=auth_schemas.Token)
async def login_with_google(
    request: auth_schemas.GoogleLoginRequest,
    db: Session = Depends(get_db)
):
    profile = auth_service.verify_google_id_token(token=request.token, db=db)

    # The profile email is the token subject
    access_token_expires = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    access_token = security.create_access_token(
        data={"sub": profile.email}, expires_delta=access_token_expires
    )
    return {"access_token": access_token, "token_type": "bearer"}
