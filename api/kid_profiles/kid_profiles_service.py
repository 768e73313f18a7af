import logging
from typing import List, Optional, Tuple

from fastapi import HTTPException, status
from sqlalchemy.orm import Session

from api.kid_profiles.kid_profiles_model import KidProfile
from api.kid_profiles.kid_profiles_schema import KidProfileCreate, KidProfileUpdate
from api.progress.learning_progress_model import LearningProgress
from api.badges.badges_service import ProgressTotals, compute_totals
from api.user.user_model import User

logger = logging.getLogger(__name__)

CHILD_NOT_FOUND = "Child not found or access denied"


def get_owned_child(db: Session, child_id: str, current_user: dict) -> KidProfile:
    """
    Resolve a child the caller may act on: their own child, or any child
    for an admin. "Missing" and "not yours" both answer 404.
    """
    query = db.query(KidProfile).filter(KidProfile.id == child_id)
    if current_user.get("role") != "admin":
        query = query.filter(KidProfile.parent_id == current_user["id"])
    child = query.first()
    if not child:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=CHILD_NOT_FOUND
        )
    return child


def list_kids_for_parent(db: Session, parent_id: str) -> List[KidProfile]:
    return (
        db.query(KidProfile)
          .filter(KidProfile.parent_id == parent_id)
          .order_by(KidProfile.created_at.desc())
          .all()
    )


def list_all_kids(db: Session) -> List[Tuple[KidProfile, str]]:
    return (
        db.query(KidProfile, User.display_name)
          .join(User, KidProfile.parent_id == User.id)
          .order_by(KidProfile.created_at.desc())
          .all()
    )


def create_kid(db: Session, parent_id: str, data: KidProfileCreate) -> KidProfile:
    kid = KidProfile(
        parent_id=parent_id,
        display_name=data.display_name,
        age=data.age,
        avatar_color=data.avatar_color,
        learning_level=data.learning_level,
    )
    db.add(kid)
    db.commit()
    db.refresh(kid)
    logger.info("Created kid profile %s for parent %s", kid.id, parent_id)
    return kid


def _get_kid_of_parent(db: Session, kid_id: str, parent_id: str) -> Optional[KidProfile]:
    return (
        db.query(KidProfile)
          .filter(KidProfile.id == kid_id, KidProfile.parent_id == parent_id)
          .first()
    )


def update_kid(db: Session, kid_id: str, parent_id: str, data: KidProfileUpdate) -> KidProfile:
    kid = _get_kid_of_parent(db, kid_id, parent_id)
    if not kid:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Kid profile not found"
        )

    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid fields to update"
        )

    # field names come from the KidProfileUpdate schema, never from the request
    for field, value in updates.items():
        setattr(kid, field, value)
    db.commit()
    db.refresh(kid)
    return kid


def delete_kid(db: Session, kid_id: str, parent_id: str) -> None:
    kid = _get_kid_of_parent(db, kid_id, parent_id)
    if not kid:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Kid profile not found"
        )
    db.delete(kid)
    db.commit()
    logger.info("Deleted kid profile %s", kid_id)


def get_kid_totals(db: Session, kid_id: str) -> ProgressTotals:
    rows = (
        db.query(LearningProgress)
          .filter(LearningProgress.child_id == kid_id)
          .all()
    )
    return compute_totals(rows)
