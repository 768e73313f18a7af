from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy.orm import Session
from typing import List

from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from middlewares.role_middleware import role_middleware
from api.kid_profiles.kid_profiles_controller import (
    list_kids_controller,
    create_kid_controller,
    update_kid_controller,
    delete_kid_controller,
    kid_stats_controller,
)
from api.kid_profiles.kid_profiles_schema import (
    KidProfileCreate,
    KidProfileRead,
    KidProfileUpdate,
    KidWithStats,
)
from api.user.user_schema import Message

router = APIRouter(prefix="/users", tags=["Kid Profiles"])


class KidList(BaseModel):
    kids: List[KidProfileRead]

class KidResponse(BaseModel):
    message: str
    kid: KidProfileRead

class KidStatsList(BaseModel):
    kids: List[KidWithStats]


@router.get("/kids", response_model=KidList)
def get_kids(
    db: Session = Depends(get_db),
    current_user: dict = Depends(auth_middleware),
):
    return {"kids": list_kids_controller(db, current_user)}

@router.post(
    "/kids",
    response_model=KidResponse,
    status_code=status.HTTP_201_CREATED,
)
def post_kid(
    data: KidProfileCreate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(role_middleware(["parent"])),
):
    return create_kid_controller(db, current_user, data)

@router.put("/kids/{kid_id}", response_model=KidResponse)
def put_kid(
    kid_id: str,
    data: KidProfileUpdate,
    db: Session = Depends(get_db),
    current_user: dict = Depends(role_middleware(["parent"])),
):
    return update_kid_controller(db, current_user, kid_id, data)

@router.delete("/kids/{kid_id}", response_model=Message)
def remove_kid(
    kid_id: str,
    db: Session = Depends(get_db),
    current_user: dict = Depends(role_middleware(["parent"])),
):
    return delete_kid_controller(db, current_user, kid_id)

@router.get(
    "/stats",
    response_model=KidStatsList,
    summary="Lifetime totals for each of the parent's children"
)
def get_stats(
    db: Session = Depends(get_db),
    current_user: dict = Depends(role_middleware(["parent"])),
):
    return {"kids": kid_stats_controller(db, current_user)}
