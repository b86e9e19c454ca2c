from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Boolean, Text
from sqlalchemy.orm import relationship
from app.core.database import Base
import datetime

class Event(Base):
    __tablename__ = "events"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), index=True) # organizer
    title = Column(String)
    description = Column(Text, nullable=True)
    event_type = Column(String, default="tournament") # "tournament" or "match"
    image_url = Column(String, nullable=True)
    venue = Column(String, nullable=True)
    address = Column(String, nullable=True)
    city = Column(String, nullable=True)
    province = Column(String, nullable=True)
    country = Column(String, nullable=True)
    event_date = Column(DateTime, nullable=True)
    registration_url = Column(String, nullable=True)
    log_withdrawals = Column(Boolean, default=False)
    allow_open_requests = Column(Boolean, default=False)
    rules_set = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.datetime.utcnow, onupdate=datetime.datetime.utcnow)

    organizer = relationship("Profile", back_populates="events")
    matches = relationship(
        "Match",
        back_populates="event",
        cascade="all, delete-orphan",
        order_by="Match.id",
    )
