from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from datetime import datetime
from typing import Any, Dict, Optional
from config.badges_config import BadgeCriterion

CRITERIA_KEYS = {c.value for c in BadgeCriterion}

class BadgeBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    description: Optional[str] = None
    icon_url: Optional[str] = None
    criteria: Dict[str, Any] = {}

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )

class BadgeCreate(BadgeBase):
    criteria: Dict[str, int]

    @field_validator("criteria")
    @classmethod
    def validate_criteria(cls, v):
        if not v:
            raise ValueError("criteria must name at least one threshold")
        unknown = set(v) - CRITERIA_KEYS
        if unknown:
            raise ValueError(f"unknown criteria keys: {sorted(unknown)}")
        if any(threshold < 1 for threshold in v.values()):
            raise ValueError("criteria thresholds must be positive integers")
        return v

class BadgeRead(BadgeBase):
    id: str
    created_at: Optional[datetime] = None

class ChildBadgeRead(BadgeRead):
    earned: bool
    earned_date: Optional[str] = None
