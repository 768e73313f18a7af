# config/badges_config.py

from enum import Enum

class BadgeCriterion(str, Enum):
    learning_minutes   = "learning_minutes"    # cumulative minutes across all days
    stories_read       = "stories_read"        # completed items tagged "story"
    quizzes_completed  = "quizzes_completed"   # distinct quiz ids per day, summed

# Catalog seeded at startup
DEFAULT_BADGES = [
    {
        "id": "badge-1",
        "name": "First Reader",
        "description": "Read your first story",
        "icon_url": "/icons/badges/first-reader.svg",
        "criteria": {BadgeCriterion.stories_read.value: 1},
    },
    {
        "id": "badge-2",
        "name": "Quiz Master",
        "description": "Complete your first quiz",
        "icon_url": "/icons/badges/quiz-master.svg",
        "criteria": {BadgeCriterion.quizzes_completed.value: 1},
    },
    {
        "id": "badge-3",
        "name": "Busy Learner",
        "description": "Spend an hour learning",
        "icon_url": "/icons/badges/busy-learner.svg",
        "criteria": {BadgeCriterion.learning_minutes.value: 60},
    },
]
