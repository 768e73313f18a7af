# badges_routes.py
from fastapi import APIRouter, Depends, status
from typing import List
from sqlalchemy.orm import Session
from config.database import get_db
from middlewares.role_middleware import role_middleware
from api.badges.badges_controller import list_all_badges, create_new_badge
from api.badges.badges_schema import BadgeRead, BadgeCreate

router = APIRouter(prefix="/achievements", tags=["Achievements"])

@router.get(
    "/badges",
    response_model=List[BadgeRead],
    summary="List all available badges"
)
def get_badges(
    db: Session = Depends(get_db)
):
    return list_all_badges(db)

@router.post(
    "/badges",
    response_model=BadgeRead,
    status_code=status.HTTP_201_CREATED,
    summary="Create a new badge"
)
def post_badge(
    badge_in: BadgeCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(role_middleware(["admin"]))
):
    return create_new_badge(badge_in, db)
