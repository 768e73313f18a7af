from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from api.user.user_model import UserRole
from api.user.user_schema import (
    UserRegister,
    UserResponse,
    ProfileResponse,
    ProfileUpdate,
    LoginRequest,
    ChangePasswordRequest,
    EmailRequest,
    ResetPasswordRequest,
)
from api.user.user_service import (
    create_user,
    authenticate_user,
    get_access_token,
    get_user,
    change_user_password,
    update_display_name,
    verify_email_token,
    resend_verification,
    request_password_reset,
    reset_password_with_token,
)
from api.kid_profiles.kid_profiles_schema import KidProfileRead
from api.parent_settings.parent_settings_schema import ParentSettingsRead

# Controller functions for user operations

def register_user(req: UserRegister, db: Session) -> dict:
    """
    Creates an unverified user holding a 24h verification token. Login does
    not wait for verification.
    """
    db_user = create_user(db, req)
    return {
        "message": "User registered successfully. Please check your email to verify your account.",
        "user": UserResponse.model_validate(db_user),
        "requires_verification": True,
    }


def login_user(credentials: LoginRequest, db: Session) -> dict:
    # authenticate_user raises 401 on failure
    user = authenticate_user(db, credentials.email, credentials.password)

    token = get_access_token(user)
    return {
        "message": "Login successful",
        "user": UserResponse.model_validate(user),
        "token": token,
    }


def _load_user_or_404(db: Session, user_id: str):
    user = get_user(db, user_id)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    return user


def get_profile_details(current_user: dict, db: Session) -> ProfileResponse:
    user = _load_user_or_404(db, current_user["id"])
    profile = ProfileResponse(**UserResponse.model_validate(user).model_dump())
    if user.role != UserRole.parent:
        return profile

    # parents also see their children and settings
    profile.kids = [KidProfileRead.model_validate(kid) for kid in user.kids]
    if user.settings is not None:
        profile.settings = ParentSettingsRead.model_validate(user.settings)
    return profile


def update_profile(data: ProfileUpdate, current_user: dict, db: Session) -> dict:
    user = _load_user_or_404(db, current_user["id"])
    if data.display_name:
        user = update_display_name(db, user.id, data.display_name)
    return {
        "message": "Profile updated successfully",
        "user": UserResponse.model_validate(user),
    }


def change_password_controller(
    data: ChangePasswordRequest,
    current_user: dict,
    db: Session
) -> dict:
    """
    Change password for the current_user.
    """
    success = change_user_password(
        db,
        current_user["id"],
        data.current_password,
        data.new_password
    )
    if not success:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Current password is incorrect"
        )
    return {"message": "Password changed successfully"}


def refresh_token(current_user: dict, db: Session) -> dict:
    user = _load_user_or_404(db, current_user["id"])
    return {
        "message": "Token refreshed successfully",
        "token": get_access_token(user),
    }


def verify_email_controller(token: str, db: Session) -> dict:
    user = verify_email_token(db, token)
    return {
        "message": "Email verified successfully! Welcome to Cre8 Kids!",
        "user": UserResponse.model_validate(user),
    }


def resend_verification_controller(data: EmailRequest, db: Session) -> dict:
    resend_verification(db, data.email)
    return {"message": "Verification email sent successfully. Please check your inbox."}


def forgot_password_controller(data: EmailRequest, db: Session) -> dict:
    # same answer whether or not the account exists
    request_password_reset(db, data.email)
    return {"message": "If an account with that email exists, a password reset link has been sent."}


def reset_password_controller(data: ResetPasswordRequest, db: Session) -> dict:
    reset_password_with_token(db, data.token, data.new_password)
    return {"message": "Password reset successfully. You can now log in with your new password."}
