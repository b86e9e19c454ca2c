from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from app.core.database import Base
import datetime

class MatchRequest(Base):
    __tablename__ = "event_match_requests"
    # Reopening reuses the existing row instead of adding another one.
    __table_args__ = (
        UniqueConstraint("match_id", "user_id", "competitor_position", name="uq_request_user_slot"),
    )

    id = Column(Integer, primary_key=True, index=True)
    match_id = Column(Integer, ForeignKey("event_matches.id"), index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), index=True)
    competitor_position = Column(Integer)
    status = Column(String, default="pending") # see MatchRequestStatus
    type = Column(String, default="request") # "request" or "invite"
    message = Column(String, nullable=True)
    response_message = Column(String, nullable=True)
    responded_at = Column(DateTime, nullable=True)
    responded_by = Column(Integer, ForeignKey("profiles.id"), nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)

    match = relationship("Match", back_populates="requests")
    user = relationship("Profile", foreign_keys=[user_id])
    responder = relationship("Profile", foreign_keys=[responded_by])
