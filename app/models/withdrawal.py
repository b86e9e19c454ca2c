from sqlalchemy import Column, Integer, String, ForeignKey, DateTime
from app.core.database import Base
import datetime

class Withdrawal(Base):
    __tablename__ = "event_withdrawals"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("profiles.id"), index=True)
    # Plain columns: the record outlives the event and match rows.
    event_id = Column(Integer, index=True)
    match_id = Column(Integer, index=True)
    reason = Column(String) # see WithdrawalReason
    comment = Column(String, nullable=True)
    created_at = Column(DateTime, default=datetime.datetime.utcnow)
