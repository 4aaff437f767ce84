from datetime import datetime

from sqlalchemy import Column, Date, DateTime, Float, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from fittrack.database import Base


class WeightLog(Base):
    __tablename__ = "weight_logs"
    # One weight entry per user per calendar day; the upsert conflicts on this.
    __table_args__ = (UniqueConstraint("user_id", "log_day", name="uq_user_weight_day"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    weight = Column(Float, nullable=False)
    date = Column(DateTime, default=datetime.now, nullable=False, index=True)
    log_day = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)

    user = relationship("User", backref="weight_logs")
