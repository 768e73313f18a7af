from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.user.user_controller import get_profile_details, update_profile
from api.user.user_schema import ProfileResponse, ProfileUpdate

# The dashboard reads and edits the profile under /users; /auth/profile serves the same data.
router = APIRouter(prefix="/users", tags=["Users"])

@router.get(
    "/profile",
    response_model=ProfileResponse,
    response_model_exclude_none=True,
)
def get_user_profile(
    current_user: dict = Depends(auth_middleware),
    db: Session = Depends(get_db)
):
    return get_profile_details(current_user, db)

@router.put("/profile")
def edit_user_profile(
    data: ProfileUpdate,
    current_user: dict = Depends(auth_middleware),
    db: Session = Depends(get_db)
):
    result = update_profile(data, current_user, db)
    return {
        "message": result["message"],
        "user": result["user"].model_dump(by_alias=True, mode="json"),
    }
