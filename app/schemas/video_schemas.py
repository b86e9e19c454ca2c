from pydantic import BaseModel, ConfigDict, Field
from typing import Optional
from datetime import datetime

class DeleteAssetRequest(BaseModel):
    mux_playback_id: str
    technique_id: int

class SaveMetadataRequest(BaseModel):
    upload_id: str
    title: str = Field(..., min_length=1)
    position: Optional[str] = None
    description: Optional[str] = None
    thumbnail_time: Optional[float] = Field(None, ge=0)
    user_id: Optional[int] = None # must match the caller when present

class TechniqueUpdateRequest(BaseModel):
    """Body of the technique edit form, sent with camelCase keys."""
    model_config = ConfigDict(populate_by_name=True)

    playback_id: str = Field(..., alias="playbackId")
    title: str = Field(..., min_length=1)
    position: Optional[str] = None
    description: Optional[str] = None
    thumbnail_time: Optional[float] = Field(None, alias="thumbnailTime", ge=0)
    thumbnail_url: Optional[str] = Field(None, alias="thumbnailUrl")
    user_id: Optional[int] = Field(None, alias="userId")

class TechniqueRead(BaseModel):
    id: int
    user_id: int
    title: str
    position: Optional[str] = None
    description: Optional[str] = None
    mux_asset_id: Optional[str] = None
    mux_playback_id: Optional[str] = None
    thumbnail_time: Optional[float] = None
    thumbnail_url: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
