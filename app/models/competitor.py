from sqlalchemy import Column, Integer, String, ForeignKey, Boolean, Float, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base

class Competitor(Base):
    __tablename__ = "event_match_competitors"
    # One competitor per slot; a second insert for a filled slot is a conflict.
    __table_args__ = (UniqueConstraint("match_id", "competitor_position", name="uq_competitor_slot"),)

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(Integer, ForeignKey("event_matches.id"), index=True)
    competitor_position = Column(Integer) # 1 or 2
    competitor_type = Column(String, default="registered_user") # "registered_user" or "manual_entry"
    user_id = Column(Integer, ForeignKey("profiles.id"), nullable=True)
    manual_name = Column(String, nullable=True)
    manual_belt = Column(String, nullable=True)
    manual_weight = Column(Float, nullable=True)
    confirmed = Column(Boolean, default=False)

    match = relationship("Match", back_populates="competitors")
    user = relationship("Profile")
