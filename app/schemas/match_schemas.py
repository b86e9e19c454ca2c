from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime

from app.models.enums import AgeCategory, MatchFormat, MatchResult
from .user_schemas import ProfileRead

class MatchBase(BaseModel):
    belt_level: Optional[str] = None
    gender: Optional[str] = None
    weight_limit: Optional[float] = Field(None, gt=0, description="Weight limit in kg")
    age_category: AgeCategory = AgeCategory.NORMAL
    match_format: MatchFormat = MatchFormat.GI
    time_limit: Optional[int] = Field(None, gt=0, description="Minutes; omit for no time limit")
    sub_only: bool = False
    custom_rules: Optional[str] = None

    class Config:
        use_enum_values = True

class MatchCreate(MatchBase):
    pass

class MatchUpdate(BaseModel):
    belt_level: Optional[str] = None
    gender: Optional[str] = None
    weight_limit: Optional[float] = Field(None, gt=0)
    age_category: Optional[AgeCategory] = None
    match_format: Optional[MatchFormat] = None
    time_limit: Optional[int] = Field(None, gt=0)
    sub_only: Optional[bool] = None
    custom_rules: Optional[str] = None

    class Config:
        use_enum_values = True

class CompetitorRead(BaseModel):
    id: int
    match_id: int
    competitor_position: int
    competitor_type: str
    user_id: Optional[int] = None
    manual_name: Optional[str] = None
    manual_belt: Optional[str] = None
    manual_weight: Optional[float] = None
    confirmed: bool
    user: Optional[ProfileRead] = None

    class Config:
        from_attributes = True

class ManualCompetitorCreate(BaseModel):
    competitor_position: int = Field(..., ge=1, le=2)
    manual_name: str = Field(..., min_length=1)
    manual_belt: Optional[str] = None
    manual_weight: Optional[float] = Field(None, gt=0)

class MatchRead(MatchBase):
    id: int
    event_id: int
    status: str
    result: Optional[str] = None
    method_of_victory: Optional[str] = None
    finish_time: Optional[int] = None
    created_at: Optional[datetime] = None
    competitors: List[CompetitorRead] = []

    class Config:
        from_attributes = True

class MatchResultUpdate(BaseModel):
    result: MatchResult
    method_of_victory: Optional[str] = None # e.g. "Armbar", "Points", "Referee decision"
    finish_time: Optional[int] = Field(None, ge=0, description="Seconds into the match")

    class Config:
        use_enum_values = True
