from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Boolean, Float
from sqlalchemy.orm import relationship
from app.core.database import Base
import datetime

class Match(Base):
    __tablename__ = "event_matches"

    id = Column(Integer, primary_key=True, index=True)
    event_id = Column(Integer, ForeignKey("events.id"), index=True)
    belt_level = Column(String, nullable=True)
    gender = Column(String, nullable=True)
    weight_limit = Column(Float, nullable=True) # kg
    age_category = Column(String, default="normal") # "kids", "normal", "masters"
    match_format = Column(String, default="gi") # "gi", "no_gi", "both"
    time_limit = Column(Integer, nullable=True) # minutes, None means no time limit
    sub_only = Column(Boolean, default=False)
    custom_rules = Column(String, nullable=True)
    status = Column(String, default="pending") # "pending", "confirmed", "completed", "cancelled"
    result = Column(String, nullable=True) # "competitor_1_win", "competitor_2_win", "draw"
    method_of_victory = Column(String, nullable=True)
    finish_time = Column(Integer, nullable=True) # seconds
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    event = relationship("Event", back_populates="matches")
    competitors = relationship(
        "Competitor",
        back_populates="match",
        cascade="all, delete-orphan",
        order_by="Competitor.competitor_position",
    )
    requests = relationship("MatchRequest", back_populates="match", cascade="all, delete-orphan")
