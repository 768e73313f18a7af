from datetime import date, timedelta
from typing import Dict, Optional

from sqlalchemy.orm import Session

from api.progress.learning_progress_model import LearningProgress
from config.settings import settings
from utils.date_utils import to_date_str, utc_today, window_dates


def compute_streak(minutes_by_date: Dict[str, int], today: date, window_days: int = 30) -> Dict[str, int]:
    """
    Walk `window_days` days backward from `today`. A day counts when it has
    more than zero minutes; a missing day counts the same as a zero day.
    """
    current_streak = 0
    longest_streak = 0
    temp_streak = 0
    in_current_run = True
    active_days = 0
    total_minutes = 0

    for day in window_dates(today, window_days):
        minutes = minutes_by_date.get(day, 0)
        total_minutes += minutes
        if minutes > 0:
            active_days += 1
            temp_streak += 1
            if in_current_run:
                current_streak = temp_streak
        else:
            in_current_run = False
            longest_streak = max(longest_streak, temp_streak)
            temp_streak = 0

    # a run reaching the oldest day of the window is never closed by a gap
    longest_streak = max(longest_streak, temp_streak)

    return {
        "current_streak": current_streak,
        "longest_streak": longest_streak,
        "days_with_activity_in_last30": active_days,
        "total_minutes_in_last30": total_minutes,
    }


class StreakService:
    def __init__(self, db: Session, window_days: Optional[int] = None):
        self.db = db
        self.window_days = window_days or settings.STREAK_WINDOW_DAYS

    def get_streak(self, child_id: str, today: Optional[date] = None) -> Dict[str, int]:
        today = today or utc_today()
        oldest = to_date_str(today - timedelta(days=self.window_days - 1))
        rows = (
            self.db.query(LearningProgress.date, LearningProgress.learning_minutes)
              .filter(
                  LearningProgress.child_id == child_id,
                  LearningProgress.date >= oldest,
                  LearningProgress.date <= to_date_str(today),
              )
              .all()
        )
        minutes_by_date = {row.date: row.learning_minutes or 0 for row in rows}
        return compute_streak(minutes_by_date, today, self.window_days)
