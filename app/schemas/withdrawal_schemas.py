from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from app.models.enums import WithdrawalReason

class WithdrawalCreate(BaseModel):
    reason: WithdrawalReason
    comment: Optional[str] = None

    class Config:
        use_enum_values = True

class WithdrawalRead(BaseModel):
    id: int
    user_id: int
    event_id: int
    match_id: int
    reason: str
    comment: Optional[str] = None
    created_at: Optional[datetime] = None

    class Config:
        from_attributes = True
