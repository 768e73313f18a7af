from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Optional
from datetime import datetime
from api.kid_profiles.kid_profiles_model import LearningLevel

HEX_COLOR = r"^#(?:[0-9a-fA-F]{3}){1,2}$"

class KidProfileCreate(BaseModel):
    display_name: str = Field(..., min_length=1, max_length=50)
    age: int = Field(..., ge=1, le=18)
    avatar_color: str = Field("#3b82f6", pattern=HEX_COLOR)
    learning_level: LearningLevel = LearningLevel.beginner

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid"
    )

class KidProfileUpdate(BaseModel):
    """Only these fields may change; unknown keys are rejected."""
    display_name: Optional[str] = Field(None, min_length=1, max_length=50)
    age: Optional[int] = Field(None, ge=1, le=18)
    avatar_color: Optional[str] = Field(None, pattern=HEX_COLOR)
    learning_level: Optional[LearningLevel] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid"
    )

class KidProfileRead(BaseModel):
    id: str
    parent_id: str
    display_name: str
    age: int
    avatar_color: str
    learning_level: LearningLevel
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    parent_name: Optional[str] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )

class KidStats(BaseModel):
    total_learning_minutes: int = 0
    total_stories_read: int = 0
    total_quizzes_completed: int = 0

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

class KidWithStats(KidProfileRead):
    stats: KidStats
