from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel
from typing import Any, Dict, List, Optional, Union

CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)

# ----- Requests -----
class CompletedItemIn(BaseModel):
    id: str = Field(..., min_length=1, max_length=100)
    type: Optional[str] = Field(None, max_length=30)
    title: Optional[str] = None

class QuizScoreEntry(BaseModel):
    # percentage and date are filled in when the entry is stored
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=1)
    time_spent: Optional[int] = Field(None, ge=0)

    model_config = CAMEL_CONFIG

    @model_validator(mode="after")
    def check_score_within_total(self):
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed totalQuestions")
        return self

class ProgressUpdate(BaseModel):
    learning_minutes: int = Field(..., ge=0, description="Minutes to add to today's total")
    completed_items: List[Union[str, CompletedItemIn]] = Field(
        default_factory=list,
        description="Item ids, or {id, type} objects"
    )
    quiz_scores: Dict[str, QuizScoreEntry] = Field(default_factory=dict)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid",
    )

class QuizResultCreate(BaseModel):
    quiz_id: str = Field(..., min_length=1, max_length=100)
    score: int = Field(..., ge=0)
    total_questions: int = Field(..., ge=1)
    time_spent: Optional[int] = Field(None, ge=0, description="Seconds spent on the quiz")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid",
    )

    @model_validator(mode="after")
    def check_score_within_total(self):
        if self.score > self.total_questions:
            raise ValueError("score cannot exceed totalQuestions")
        return self

# ----- Responses -----
class ProgressRead(BaseModel):
    child_id: str
    date: str
    learning_minutes: int = 0
    completed_items: List[Dict[str, Any]] = []
    quiz_scores: Dict[str, Dict[str, Any]] = {}
    streak_count: int = 0
    badges_earned: List[str] = []

    model_config = CAMEL_CONFIG

class ProgressEnvelope(BaseModel):
    progress: ProgressRead

class ProgressUpdateResponse(BaseModel):
    message: str
    learning_minutes: int

    model_config = CAMEL_CONFIG

class QuizResultResponse(BaseModel):
    message: str
    score: int
    badge_earned: Optional[str] = None

    model_config = CAMEL_CONFIG

class StreakRead(BaseModel):
    current_streak: int
    longest_streak: int
    days_with_activity_in_last30: int
    total_minutes_in_last30: int

    model_config = CAMEL_CONFIG
