from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from api.parent_settings.parent_settings_schema import ParentSettingsRead, ParentSettingsUpdate
from api.parent_settings.parent_settings_service import (
    get_or_create_parent_settings,
    update_parent_settings,
)
from config.database import get_db
from middlewares.role_middleware import role_middleware

router = APIRouter(
    prefix="/users/settings",
    tags=["Parent Settings"],
)


class SettingsEnvelope(BaseModel):
    settings: ParentSettingsRead

class SettingsUpdated(SettingsEnvelope):
    message: str


@router.get(
    "",
    response_model=SettingsEnvelope,
    summary="Get the parent's learning limits, creating defaults on first use",
)
def get_settings(
    db: Session = Depends(get_db),
    current_user: dict = Depends(role_middleware(["parent"])),
):
    settings = get_or_create_parent_settings(db, current_user["id"])
    return {"settings": ParentSettingsRead.model_validate(settings)}

@router.put(
    "",
    response_model=SettingsUpdated,
    summary="Update daily learning minutes, unlock minutes and filters",
)
def put_settings(
    payload: ParentSettingsUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(role_middleware(["parent"])),
):
    settings = update_parent_settings(db, current_user["id"], payload)
    return {
        "message": "Settings updated successfully",
        "settings": ParentSettingsRead.model_validate(settings),
    }
