from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from api.parent_settings.parent_settings_model import ParentSettings
from api.parent_settings.parent_settings_schema import ParentSettingsUpdate


def get_or_create_parent_settings(db: Session, parent_id: str) -> ParentSettings:
    """
    Retrieve parent settings if they exist; otherwise, create default settings.
    """
    settings = db.query(ParentSettings).filter_by(parent_id=parent_id).first()
    if not settings:
        settings = ParentSettings(
            parent_id=parent_id,
            daily_learning_minutes=30,
            fun_unlock_minutes=15,
            content_filters=[],
            screen_time_limits={},
        )
        db.add(settings)
        db.commit()
        db.refresh(settings)
    return settings


def update_parent_settings(db: Session, parent_id: str, data: ParentSettingsUpdate) -> ParentSettings:
    """
    Apply the provided fields. Only the fields declared on
    ParentSettingsUpdate can reach the row.
    """
    updates = data.model_dump(exclude_unset=True, exclude_none=True)
    if not updates:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No valid fields to update"
        )

    settings = get_or_create_parent_settings(db, parent_id)
    for field, value in updates.items():
        setattr(settings, field, value)
    db.commit()
    db.refresh(settings)
    return settings
