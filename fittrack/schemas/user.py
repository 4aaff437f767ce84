import math
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, EmailStr, Field, field_validator


class GoalEnum(str, Enum):
    lose = "lose"
    maintain = "maintain"
    gain = "gain"


class ProfileUpdate(BaseModel):
    name: str | None = Field(default=None, min_length=1, max_length=100)
    height: float | None = None
    weight: float | None = None
    age: int | None = None
    gender: str | None = None
    activity_level: float | None = None  # e.g. 1.2 sedentary .. 1.9 extra active
    goal: GoalEnum | None = None

    @field_validator("height", "weight", "age", "activity_level")
    @classmethod
    def validate_positive(cls, value, info):
        if value is not None and (not math.isfinite(value) or value <= 0):
            raise ValueError(f"{info.field_name} must be positive")
        return value


class ProfileResponse(BaseModel):
    id: int
    name: str
    email: EmailStr
    height: float | None
    weight: float | None
    age: int | None
    gender: str | None
    activity_level: float | None
    goal: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}
