"""
Badge catalog access and the badge evaluator.

The evaluator re-scans every progress row of a child, sums learning minutes,
stories read and quizzes completed, and appends any newly qualifying badge id
to *today's* row. A badge qualifies when any one of its criteria thresholds is
met. Evaluation is best-effort: failures are logged and never reach the caller.
"""
import logging
from dataclasses import dataclass, asdict
from datetime import date
from typing import Any, Dict, Iterable, List, Optional

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.badges.badges_model import Badge
from api.badges.badges_schema import BadgeCreate
from api.progress.learning_progress_model import LearningProgress
from config.badges_config import DEFAULT_BADGES
from utils.date_utils import today_str

logger = logging.getLogger(__name__)

STORY_TYPE = "story"


@dataclass
class ProgressTotals:
    learning_minutes: int = 0
    stories_read: int = 0
    quizzes_completed: int = 0

    def as_dict(self) -> Dict[str, int]:
        return asdict(self)


def _count_stories(items: Optional[list]) -> int:
    return sum(
        1 for item in (items or [])
        if isinstance(item, dict) and item.get("type") == STORY_TYPE
    )


def compute_totals(rows: Iterable[LearningProgress]) -> ProgressTotals:
    totals = ProgressTotals()
    for row in rows:
        totals.learning_minutes += row.learning_minutes or 0
        totals.stories_read += _count_stories(row.completed_items)
        totals.quizzes_completed += len(row.quiz_scores or {})
    return totals


def criteria_met(criteria: Any, totals: ProgressTotals) -> bool:
    """
    OR across the thresholds present in `criteria`. Unknown keys and zero
    thresholds are ignored. Raises ValueError for criteria that are not a
    mapping of names to numbers.
    """
    if not isinstance(criteria, dict):
        raise ValueError(f"Malformed badge criteria: {criteria!r}")

    values = totals.as_dict()
    for key, threshold in criteria.items():
        if key not in values or not threshold:
            continue
        if isinstance(threshold, bool) or not isinstance(threshold, (int, float)):
            raise ValueError(f"Malformed threshold for {key}: {threshold!r}")
        if values[key] >= threshold:
            return True
    return False


class BadgeService:
    def __init__(self, db: Session):
        self.db = db

    # ─── Catalog ────────────────────────────────────────────────────────────

    def list_badges(self) -> List[Badge]:
        return self.db.query(Badge).order_by(Badge.created_at, Badge.id).all()

    def get_badge(self, badge_id: str) -> Optional[Badge]:
        return self.db.query(Badge).filter(Badge.id == badge_id).first()

    def create_badge(self, badge_in: BadgeCreate) -> Badge:
        exists = self.db.query(Badge).filter(Badge.name == badge_in.name).first()
        if exists:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Badge name already exists")
        badge = Badge(**badge_in.model_dump())
        self.db.add(badge)
        self.db.commit()
        self.db.refresh(badge)
        logger.info("Created badge %s (%s)", badge.id, badge.name)
        return badge

    def seed_default_badges(self) -> int:
        """Insert catalog entries that are missing. Returns how many were added."""
        existing = {b.id for b in self.db.query(Badge.id).all()}
        added = 0
        for entry in DEFAULT_BADGES:
            if entry["id"] in existing:
                continue
            self.db.add(Badge(**entry))
            added += 1
        if added:
            self.db.commit()
            logger.info("Seeded %d badge(s)", added)
        return added

    # ─── Evaluation ─────────────────────────────────────────────────────────

    def check_and_award_badges(self, child_id: str, today: Optional[date] = None) -> List[str]:
        """
        Award every qualifying badge not yet in today's earned set.
        Returns the ids awarded by this pass; never raises.
        """
        current_date = today_str(today)
        try:
            rows = (
                self.db.query(LearningProgress)
                  .filter(LearningProgress.child_id == child_id)
                  .populate_existing()
                  .all()
            )
            if not rows:
                return []

            today_row = next((r for r in rows if r.date == current_date), None)
            if today_row is None:
                return []

            totals = compute_totals(rows)
            earned = list(today_row.badges_earned or [])
            awarded: List[str] = []

            for badge in self.list_badges():
                try:
                    qualifies = criteria_met(badge.criteria, totals)
                except ValueError:
                    logger.exception("Skipping badge %s with malformed criteria", badge.id)
                    continue
                if qualifies and badge.id not in earned:
                    earned.append(badge.id)
                    awarded.append(badge.id)

            if awarded:
                # reassign so the JSON column is flagged dirty
                today_row.badges_earned = earned
                self.db.commit()
                logger.info("Awarded badges %s to child %s", awarded, child_id)
            return awarded
        except Exception:
            self.db.rollback()
            logger.exception("Error checking badges for child %s", child_id)
            return []

    def list_child_badges(self, child_id: str, today: Optional[date] = None) -> List[Dict[str, Any]]:
        """Catalog entries flagged with whether they sit in today's earned set."""
        current_date = today_str(today)
        row = (
            self.db.query(LearningProgress)
              .filter(
                  LearningProgress.child_id == child_id,
                  LearningProgress.date == current_date,
              )
              .first()
        )
        earned_ids = set(row.badges_earned or []) if row else set()

        out = []
        for badge in self.list_badges():
            earned = badge.id in earned_ids
            out.append({
                "id": badge.id,
                "name": badge.name,
                "description": badge.description,
                "icon_url": badge.icon_url,
                "criteria": badge.criteria,
                "created_at": badge.created_at,
                "earned": earned,
                "earned_date": current_date if earned else None,
            })
        return out
