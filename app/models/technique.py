from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Float, Text
from app.core.database import Base
import datetime

class Technique(Base):
    __tablename__ = "techniques"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), index=True)
    title = Column(String)
    position = Column(String, nullable=True) # e.g. "Closed Guard", "Mount"
    description = Column(Text, nullable=True)
    mux_upload_id = Column(String, nullable=True)
    mux_asset_id = Column(String, nullable=True)
    mux_playback_id = Column(String, index=True, nullable=True)
    thumbnail_time = Column(Float, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)
