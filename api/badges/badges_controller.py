# badges_controller.py
from sqlalchemy.orm import Session
from typing import List
from api.badges.badges_schema import BadgeCreate, BadgeRead
from api.badges.badges_service import BadgeService

service = BadgeService

def list_all_badges(db: Session) -> List[BadgeRead]:
    return [BadgeRead.model_validate(b) for b in service(db).list_badges()]

def create_new_badge(badge_in: BadgeCreate, db: Session) -> BadgeRead:
    return BadgeRead.model_validate(service(db).create_badge(badge_in))
