"""
Daily learning progress recorder.

One row per (child, UTC date). Minutes are added with a single UPDATE so two
requests for the same day cannot lose an increment; completed items and quiz
scores are merged into the row. Every write is followed by a badge pass.
"""
import logging
from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from api.badges.badges_service import BadgeService
from api.progress.learning_progress_model import LearningProgress
from api.progress.progress_schema import (
    CompletedItemIn,
    ProgressUpdate,
    QuizResultCreate,
    QuizScoreEntry,
)
from utils.date_utils import today_str

logger = logging.getLogger(__name__)

KNOWN_ITEM_TYPES = ("story", "quiz", "song", "calm", "coplay")
DEFAULT_ITEM_TYPE = "activity"


def quiz_percentage(score: int, total_questions: int) -> int:
    """round(100 * score / total) with halves rounded up, in integer math."""
    return (200 * score + total_questions) // (2 * total_questions)


def infer_item_type(item_id: str) -> str:
    prefix = item_id.split("-", 1)[0].lower()
    return prefix if prefix in KNOWN_ITEM_TYPES else DEFAULT_ITEM_TYPE


def normalize_completed_item(item: Union[str, CompletedItemIn, Dict[str, Any]]) -> Dict[str, str]:
    if isinstance(item, str):
        return {"id": item, "type": infer_item_type(item)}
    if isinstance(item, CompletedItemIn):
        item = item.model_dump()
    item_id = str(item.get("id"))
    return {"id": item_id, "type": item.get("type") or infer_item_type(item_id)}


def merge_completed_items(existing: Iterable, new: Iterable) -> List[Dict[str, str]]:
    """Union keyed by (id, type), keeping first-seen order."""
    merged: List[Dict[str, str]] = []
    seen = set()
    for raw in list(existing or []) + list(new or []):
        item = normalize_completed_item(raw)
        key = (item["id"], item["type"])
        if key in seen:
            continue
        seen.add(key)
        merged.append(item)
    return merged


def stored_quiz_entry(entry: QuizScoreEntry, current_date: str) -> Dict[str, Any]:
    return {
        "score": entry.score,
        "totalQuestions": entry.total_questions,
        "percentage": quiz_percentage(entry.score, entry.total_questions),
        "timeSpent": entry.time_spent,
        "date": current_date,
    }


def empty_progress(child_id: str, day: str) -> Dict[str, Any]:
    return {
        "child_id": child_id,
        "date": day,
        "learning_minutes": 0,
        "completed_items": [],
        "quiz_scores": {},
        "streak_count": 0,
        "badges_earned": [],
    }


class ProgressService:
    def __init__(self, db: Session, badge_service: Optional[BadgeService] = None):
        self.db = db
        self.badge_service = badge_service or BadgeService(db)

    # ─── Reads ──────────────────────────────────────────────────────────────

    def get_row(self, child_id: str, day: str) -> Optional[LearningProgress]:
        return (
            self.db.query(LearningProgress)
              .filter(LearningProgress.child_id == child_id, LearningProgress.date == day)
              .populate_existing()
              .first()
        )

    def get_progress(self, child_id: str, day: Optional[str] = None) -> Union[LearningProgress, Dict[str, Any]]:
        """Stored row for `day` (default today) or a zeroed placeholder."""
        day = day or today_str()
        row = self.get_row(child_id, day)
        return row if row is not None else empty_progress(child_id, day)

    # ─── Writes ─────────────────────────────────────────────────────────────

    def record_progress(self, child_id: str, data: ProgressUpdate, today: Optional[date] = None) -> int:
        """
        Add minutes and merge items/scores into today's row, then evaluate
        badges. Returns today's minute total.
        """
        current_date = today_str(today)
        items = merge_completed_items([], data.completed_items)
        scores = {
            quiz_id: stored_quiz_entry(entry, current_date)
            for quiz_id, entry in data.quiz_scores.items()
        }

        row = self._upsert(
            child_id,
            current_date,
            minutes=data.learning_minutes,
            items=items,
            scores=scores,
        )
        total = row.learning_minutes

        self.badge_service.check_and_award_badges(child_id, today)
        return total

    def record_quiz_result(
        self,
        child_id: str,
        result: QuizResultCreate,
        today: Optional[date] = None,
    ) -> Tuple[int, List[str]]:
        """
        Store (or overwrite) today's entry for one quiz. Returns the
        percentage and the badge ids awarded by the follow-up badge pass.
        """
        current_date = today_str(today)
        percentage = quiz_percentage(result.score, result.total_questions)
        entry = {
            "score": result.score,
            "totalQuestions": result.total_questions,
            "percentage": percentage,
            "timeSpent": result.time_spent,
            "date": current_date,
        }
        self._upsert(child_id, current_date, minutes=0, items=[], scores={result.quiz_id: entry})

        awarded = self.badge_service.check_and_award_badges(child_id, today)
        return percentage, awarded

    # ─── Internals ──────────────────────────────────────────────────────────

    def _upsert(
        self,
        child_id: str,
        day: str,
        minutes: int,
        items: List[Dict[str, str]],
        scores: Dict[str, Dict[str, Any]],
    ) -> LearningProgress:
        row = self.get_row(child_id, day)
        if row is None:
            row = LearningProgress(
                child_id=child_id,
                date=day,
                learning_minutes=minutes,
                completed_items=items,
                quiz_scores=scores,
                badges_earned=[],
            )
            self.db.add(row)
            try:
                self.db.commit()
                self.db.refresh(row)
                return row
            except IntegrityError:
                # another request created today's row first; merge into it
                self.db.rollback()
                logger.info("Progress row for %s on %s created concurrently; merging", child_id, day)
                row = self.get_row(child_id, day)
                if row is None:
                    raise

        return self._merge(row, minutes, items, scores)

    def _merge(
        self,
        row: LearningProgress,
        minutes: int,
        items: List[Dict[str, str]],
        scores: Dict[str, Dict[str, Any]],
    ) -> LearningProgress:
        if minutes:
            self.db.execute(
                update(LearningProgress)
                .where(LearningProgress.id == row.id)
                .values(learning_minutes=LearningProgress.learning_minutes + minutes)
                .execution_options(synchronize_session=False)
            )

        merged_items = merge_completed_items(row.completed_items, items)
        merged_scores = dict(row.quiz_scores or {})
        merged_scores.update(scores)  # last write wins per quiz id

        # fresh objects so the JSON columns are flagged dirty
        row.completed_items = merged_items
        row.quiz_scores = merged_scores
        self.db.commit()
        self.db.refresh(row)
        return row
