from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from typing import List

from api.kid_profiles.kid_profiles_schema import (
    KidProfileCreate,
    KidProfileRead,
    KidProfileUpdate,
    KidStats,
    KidWithStats,
)
from api.kid_profiles.kid_profiles_service import (
    create_kid,
    delete_kid,
    get_kid_totals,
    list_all_kids,
    list_kids_for_parent,
    update_kid,
)


def list_kids_controller(db: Session, current_user: dict) -> List[KidProfileRead]:
    """
    Parents see their own children; admins see every child with the
    parent's name attached.
    """
    role = current_user.get("role")
    if role == "parent":
        return [KidProfileRead.model_validate(k) for k in list_kids_for_parent(db, current_user["id"])]
    if role == "admin":
        out = []
        for kid, parent_name in list_all_kids(db):
            read = KidProfileRead.model_validate(kid)
            read.parent_name = parent_name
            out.append(read)
        return out
    raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Access denied")


def create_kid_controller(db: Session, current_user: dict, data: KidProfileCreate) -> dict:
    kid = create_kid(db, current_user["id"], data)
    return {
        "message": "Kid profile created successfully",
        "kid": KidProfileRead.model_validate(kid),
    }


def update_kid_controller(db: Session, current_user: dict, kid_id: str, data: KidProfileUpdate) -> dict:
    kid = update_kid(db, kid_id, current_user["id"], data)
    return {
        "message": "Kid profile updated successfully",
        "kid": KidProfileRead.model_validate(kid),
    }


def delete_kid_controller(db: Session, current_user: dict, kid_id: str) -> dict:
    delete_kid(db, kid_id, current_user["id"])
    return {"message": "Kid profile deleted successfully"}


def kid_stats_controller(db: Session, current_user: dict) -> List[KidWithStats]:
    results: List[KidWithStats] = []
    for kid in list_kids_for_parent(db, current_user["id"]):
        totals = get_kid_totals(db, kid.id)
        read = KidProfileRead.model_validate(kid)
        results.append(
            KidWithStats(
                **read.model_dump(),
                stats=KidStats(
                    total_learning_minutes=totals.learning_minutes,
                    total_stories_read=totals.stories_read,
                    total_quizzes_completed=totals.quizzes_completed,
                ),
            )
        )
    return results
