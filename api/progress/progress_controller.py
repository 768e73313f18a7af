from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.badges.badges_schema import ChildBadgeRead
from api.badges.badges_service import BadgeService
from api.kid_profiles.kid_profiles_service import get_owned_child
from api.progress.progress_schema import (
    ProgressRead,
    ProgressUpdate,
    QuizResultCreate,
    StreakRead,
)
from api.progress.progress_service import ProgressService
from api.progress.streak_service import StreakService
from utils.date_utils import parse_date_str


def get_progress_controller(
    db: Session,
    current_user: dict,
    child_id: str,
    day: Optional[str] = None,
) -> dict:
    get_owned_child(db, child_id, current_user)
    if day is not None:
        try:
            parse_date_str(day)
        except ValueError:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="date must be a valid YYYY-MM-DD date"
            )
    progress = ProgressService(db).get_progress(child_id, day)
    return {"progress": ProgressRead.model_validate(progress)}


def update_progress_controller(
    db: Session,
    current_user: dict,
    child_id: str,
    data: ProgressUpdate,
) -> dict:
    get_owned_child(db, child_id, current_user)
    total = ProgressService(db).record_progress(child_id, data)
    return {
        "message": "Progress updated successfully",
        "learning_minutes": total,
    }


def record_quiz_result_controller(
    db: Session,
    current_user: dict,
    child_id: str,
    result: QuizResultCreate,
) -> dict:
    get_owned_child(db, child_id, current_user)
    percentage, awarded = ProgressService(db).record_quiz_result(child_id, result)
    return {
        "message": "Quiz results recorded successfully",
        "score": percentage,
        "badge_earned": awarded[0] if awarded else None,
    }


def get_streak_controller(db: Session, current_user: dict, child_id: str) -> StreakRead:
    get_owned_child(db, child_id, current_user)
    return StreakRead(**StreakService(db).get_streak(child_id))


def get_child_badges_controller(db: Session, current_user: dict, child_id: str) -> dict:
    get_owned_child(db, child_id, current_user)
    badges = BadgeService(db).list_child_badges(child_id)
    return {"badges": [ChildBadgeRead(**b) for b in badges]}
