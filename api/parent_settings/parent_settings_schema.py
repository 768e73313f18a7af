from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import Dict, List, Optional, Any


class ParentSettingsRead(BaseModel):
    parent_id: str
    daily_learning_minutes: int
    fun_unlock_minutes: int
    content_filters: List[str] = []
    screen_time_limits: Dict[str, Any] = {}

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class ParentSettingsUpdate(BaseModel):
    daily_learning_minutes: Optional[int] = Field(None, ge=5, le=180)
    fun_unlock_minutes: Optional[int] = Field(None, ge=5, le=120)
    content_filters: Optional[List[str]] = None
    screen_time_limits: Optional[Dict[str, Any]] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )
