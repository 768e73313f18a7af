from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session
from config.database import get_db
from middlewares.auth_middleware import auth_middleware
from api.user.user_controller import (
    register_user,
    login_user,
    get_profile_details,
    update_profile,
    change_password_controller,
    refresh_token,
    verify_email_controller,
    resend_verification_controller,
    forgot_password_controller,
    reset_password_controller,
)
from api.user.user_schema import (
    UserRegister,
    LoginRequest,
    ChangePasswordRequest,
    ProfileUpdate,
    ProfileResponse,
    Message,
    RegisterResponse,
    TokenResponse,
    RefreshResponse,
    EmailRequest,
    ResetPasswordRequest,
    VerifyEmailResponse,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

# ─── Registration & Login ──────────────────────────────────────────────────────
@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED
)
def register(
    req: UserRegister,
    db: Session = Depends(get_db)
):
    """
    Create an unverified parent or educator account.
    """
    return register_user(req, db)

@router.post("/login", response_model=TokenResponse)
def login(
    credentials: LoginRequest,
    db: Session = Depends(get_db)
):
    return login_user(credentials, db)

@router.post("/refresh", response_model=RefreshResponse)
def refresh(
    current_user: dict = Depends(auth_middleware),
    db: Session = Depends(get_db)
):
    return refresh_token(current_user, db)

@router.post("/logout", response_model=Message)
def logout(current_user: dict = Depends(auth_middleware)):
    # tokens are stateless; the client discards its copy
    return {"message": "Logged out successfully"}

# ─── Email verification & password reset ──────────────────────────────────────
@router.get("/verify-email/{token}", response_model=VerifyEmailResponse)
def verify_email(
    token: str,
    db: Session = Depends(get_db)
):
    return verify_email_controller(token, db)

@router.post("/resend-verification", response_model=Message)
def resend_verification_email(
    data: EmailRequest,
    db: Session = Depends(get_db)
):
    return resend_verification_controller(data, db)

@router.post("/forgot-password", response_model=Message)
def forgot_password(
    data: EmailRequest,
    db: Session = Depends(get_db)
):
    """
    Issue a 1h reset token. The response never reveals whether the
    account exists.
    """
    return forgot_password_controller(data, db)

@router.post("/reset-password", response_model=Message)
def reset_password(
    data: ResetPasswordRequest,
    db: Session = Depends(get_db)
):
    return reset_password_controller(data, db)

# ─── Profile Routes (protected) ─────────────────────────────────────────────────
@router.get(
    "/profile",
    response_model=ProfileResponse,
    response_model_exclude_none=True,
)
def get_profile(
    current_user: dict = Depends(auth_middleware),
    db: Session = Depends(get_db)
):
    return get_profile_details(current_user, db)

@router.put("/profile")
def edit_profile(
    data: ProfileUpdate,
    current_user: dict = Depends(auth_middleware),
    db: Session = Depends(get_db)
):
    result = update_profile(data, current_user, db)
    return {
        "message": result["message"],
        "user": result["user"].model_dump(by_alias=True, mode="json"),
    }

@router.post("/change-password", response_model=Message)
def change_password(
    data: ChangePasswordRequest,
    current_user: dict = Depends(auth_middleware),
    db: Session = Depends(get_db)
):
    return change_password_controller(data, current_user, db)
