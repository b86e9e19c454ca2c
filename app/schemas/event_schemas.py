from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.models.enums import EventType
from .user_schemas import ProfileRead
from .match_schemas import MatchCreate, MatchRead

class EventBase(BaseModel):
    title: str = Field(..., min_length=3, max_length=200)
    description: Optional[str] = None
    event_type: EventType = EventType.TOURNAMENT
    image_url: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    event_date: Optional[datetime] = None
    registration_url: Optional[str] = None
    log_withdrawals: bool = False
    allow_open_requests: bool = False
    rules_set: Optional[str] = None

    class Config:
        use_enum_values = True

class EventCreate(EventBase):
    # Only used for "match" events; tournaments link out via registration_url
    matches: List[MatchCreate] = []

class EventUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=3, max_length=200)
    description: Optional[str] = None
    event_type: Optional[EventType] = None
    image_url: Optional[str] = None
    venue: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    country: Optional[str] = None
    event_date: Optional[datetime] = None
    registration_url: Optional[str] = None
    log_withdrawals: Optional[bool] = None
    allow_open_requests: Optional[bool] = None
    rules_set: Optional[str] = None

    class Config:
        use_enum_values = True

class EventRead(EventBase):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    organizer: ProfileRead
    matches: List[MatchRead] = []

    class Config:
        from_attributes = True
