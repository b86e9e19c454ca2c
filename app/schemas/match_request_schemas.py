from pydantic import BaseModel, Field
from typing import Optional
from datetime import datetime

from .user_schemas import ProfileRead

class MatchRequestCreate(BaseModel):
    competitor_position: int = Field(..., ge=1, le=2)
    message: Optional[str] = None

class InviteCreate(BaseModel):
    user_id: int # profile being invited
    competitor_position: int = Field(..., ge=1, le=2)
    message: Optional[str] = ""

class RequestDecision(BaseModel):
    response_message: Optional[str] = None

class InviteDecision(BaseModel):
    accept: bool

class MatchRequestRead(BaseModel):
    id: int
    match_id: int
    user_id: int
    competitor_position: int
    status: str
    type: str
    message: Optional[str] = None
    response_message: Optional[str] = None
    responded_at: Optional[datetime] = None
    responded_by: Optional[int] = None
    created_at: Optional[datetime] = None
    user: Optional[ProfileRead] = None

    class Config:
        from_attributes = True
