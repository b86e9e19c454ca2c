from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date
from app.core.database import Base
import datetime

class CompetitionEntry(Base):
    """A line in a user's competition history."""
    __tablename__ = "competitions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), index=True)
    event_name = Column(String)
    competition_date = Column(Date, nullable=True)
    city = Column(String, nullable=True)
    state = Column(String, nullable=True)
    country = Column(String, nullable=True)
    status = Column(String) # e.g. "competed", "withdrew"
    match_type = Column(String, default="single")
    result = Column(String, nullable=True)
    notes = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
