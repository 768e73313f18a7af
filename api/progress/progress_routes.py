from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.badges.badges_schema import ChildBadgeRead
from api.progress.progress_controller import (
    get_progress_controller,
    update_progress_controller,
    record_quiz_result_controller,
    get_streak_controller,
    get_child_badges_controller,
)
from api.progress.progress_schema import (
    ProgressEnvelope,
    ProgressUpdate,
    ProgressUpdateResponse,
    QuizResultCreate,
    QuizResultResponse,
    StreakRead,
)

router = APIRouter(prefix="/progress", tags=["Progress"])


class ChildBadgeList(BaseModel):
    badges: List[ChildBadgeRead]


@router.get(
    "/{child_id}",
    response_model=ProgressEnvelope,
    summary="Progress for today or a given date"
)
def get_progress(
    child_id: str,
    date: Optional[str] = Query(None, pattern=r"^\d{4}-\d{2}-\d{2}$"),
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    """
    Returns the stored row, or a zeroed placeholder when nothing was
    recorded for that date.
    """
    return get_progress_controller(db, current_user, child_id, date)


@router.post(
    "/{child_id}/update",
    response_model=ProgressUpdateResponse,
    summary="Add learning minutes, completed items and quiz scores for today"
)
def update_progress(
    child_id: str,
    data: ProgressUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return update_progress_controller(db, current_user, child_id, data)


@router.post(
    "/{child_id}/quiz-results",
    response_model=QuizResultResponse,
    summary="Record a single quiz result for today"
)
def submit_quiz_results(
    child_id: str,
    result: QuizResultCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return record_quiz_result_controller(db, current_user, child_id, result)


@router.get(
    "/{child_id}/streak",
    response_model=StreakRead,
    summary="Current and longest learning streak over the last 30 days"
)
def get_streak(
    child_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_streak_controller(db, current_user, child_id)


@router.get(
    "/{child_id}/badges",
    response_model=ChildBadgeList,
    summary="Badge catalog marked with today's earned badges"
)
def get_child_badges(
    child_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return get_child_badges_controller(db, current_user, child_id)
