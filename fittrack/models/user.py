from datetime import datetime

from sqlalchemy import Column, DateTime, Float, Integer, String
from fittrack.database import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Registration fields
    name = Column(String, nullable=False)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String, nullable=False)  # bcrypt, never serialized

    # Body-metric profile, filled in from the account page
    height = Column(Float, nullable=True)
    weight = Column(Float, nullable=True)
    age = Column(Integer, nullable=True)
    gender = Column(String, nullable=True)
    activity_level = Column(Float, nullable=True)  # TDEE multiplier, e.g. 1.55
    goal = Column(String, nullable=True)           # lose / maintain / gain

    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow, nullable=False)
