from pydantic import BaseModel, EmailStr
from typing import Optional
from datetime import date

class ProfileBase(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    belt_level: Optional[str] = "White"
    avatar_url: Optional[str] = None

class ProfileCreate(ProfileBase):
    email: EmailStr
    google_id: str

class ProfileRead(ProfileBase):
    id: int

    class Config:
        from_attributes = True

class ProfileUpdate(BaseModel):
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    username: Optional[str] = None
    belt_level: Optional[str] = None
    avatar_url: Optional[str] = None

class CompetitionEntryRead(BaseModel):
    id: int
    user_id: int
    event_name: str
    competition_date: Optional[date] = None
    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    status: str
    match_type: Optional[str] = None
    result: Optional[str] = None
    notes: Optional[str] = None

    class Config:
        from_attributes = True
