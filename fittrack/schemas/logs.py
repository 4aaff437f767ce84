import math
from datetime import datetime

from pydantic import BaseModel, field_validator


def parse_log_date(value):
    """Accept ``YYYY-MM-DD`` or a full ISO timestamp; return a naive server-local datetime."""
    if value is None or isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            raise ValueError("date must be an ISO-8601 date or datetime")
    else:
        raise ValueError("date must be an ISO-8601 date or datetime")

    if parsed is not None and parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed


def _is_number(value) -> bool:
    # bool is an int subclass; true/false in JSON is not a measurement.
    # The JSON parser also lets NaN and Infinity through.
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)


def positive_calories(value) -> int:
    if not _is_number(value) or int(value) != value or value <= 0:
        raise ValueError("calories must be a positive integer")
    return int(value)


def positive_weight(value) -> float:
    if not _is_number(value) or value <= 0:
        raise ValueError("weight must be a positive number")
    return float(value)


def activity_text(value) -> str:
    if not isinstance(value, str) or not value.strip():
        raise ValueError("activity is required")
    value = value.strip()
    if len(value) > 500:
        raise ValueError("activity must be at most 500 characters")
    return value


class CalorieLogUpdate(BaseModel):
    calories: int

    @field_validator("calories", mode="before")
    @classmethod
    def validate_calories(cls, value):
        return positive_calories(value)


class CalorieLogCreate(CalorieLogUpdate):
    date: datetime | None = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value):
        return parse_log_date(value)


class WeightLogUpdate(BaseModel):
    weight: float

    @field_validator("weight", mode="before")
    @classmethod
    def validate_weight(cls, value):
        return positive_weight(value)


class WeightLogCreate(WeightLogUpdate):
    date: datetime | None = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value):
        return parse_log_date(value)


class ActivityLogUpdate(BaseModel):
    activity: str

    @field_validator("activity", mode="before")
    @classmethod
    def validate_activity(cls, value):
        return activity_text(value)


class ActivityLogCreate(ActivityLogUpdate):
    date: datetime | None = None

    @field_validator("date", mode="before")
    @classmethod
    def validate_date(cls, value):
        return parse_log_date(value)


class CalorieLogResponse(BaseModel):
    id: int
    user_id: int
    calories: int
    date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class WeightLogResponse(BaseModel):
    id: int
    user_id: int
    weight: float
    date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class ActivityLogResponse(BaseModel):
    id: int
    user_id: int
    activity: str
    date: datetime
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
