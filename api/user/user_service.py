import logging
import secrets
from datetime import timedelta
from typing import Optional

from passlib.context import CryptContext
from fastapi import HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import IntegrityError
from api.user.user_model import User, UserRole
from api.user.user_schema import UserRegister
from api.parent_settings.parent_settings_model import ParentSettings
from helpers.token_helper import create_user_token
from config.settings import settings
from utils.date_utils import is_expired, utc_now

logger = logging.getLogger(__name__)

# Initialize password hashing context (bcrypt)
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    """Hash the given password using bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain: str, hashed: str) -> bool:
    """Verify that the plain password matches the hashed password."""
    return pwd_context.verify(plain, hashed)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email.lower()).first()


def create_user(db: Session, data: UserRegister) -> User:
    """
    Create a new user. Parents also get a default settings row in the
    same transaction.
    """
    if get_user_by_email(db, data.email):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists"
        )

    new_user = User(
        email=data.email.lower(),
        password_hash=hash_password(data.password),
        role=UserRole(data.role),
        display_name=data.display_name,
        email_verified=False,
    )
    issue_verification_token(new_user)
    if new_user.role == UserRole.parent:
        new_user.settings = ParentSettings(
            daily_learning_minutes=30,
            fun_unlock_minutes=15,
            content_filters=[],
            screen_time_limits={},
        )

    db.add(new_user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration of the same email
        db.rollback()
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User with this email already exists"
        )
    db.refresh(new_user)
    logger.info("Registered %s account %s", new_user.role.value, new_user.id)
    return new_user


def authenticate_user(db: Session, email: str, password: str) -> User:
    """
    Authenticate user and raise HTTPException on failure.
    Missing user and wrong password are indistinguishable to the caller.
    """
    user = get_user_by_email(db, email)
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )
    return user


def get_access_token(user: User) -> str:
    """
    Generate JWT access token for the user.
    """
    return create_user_token(user)


def get_user(db: Session, user_id: str) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def change_user_password(
    db: Session,
    user_id: str,
    current_password: str,
    new_password: str
) -> bool:
    """
    Change a user's password after verifying current password.
    """
    user = get_user(db, user_id)
    if not user or not verify_password(current_password, user.password_hash):
        return False
    user.password_hash = hash_password(new_password)
    db.commit()
    return True


def update_display_name(db: Session, user_id: str, display_name: str) -> Optional[User]:
    user = get_user(db, user_id)
    if not user:
        return None
    user.display_name = display_name
    db.commit()
    db.refresh(user)
    return user


# ─── Email verification & password reset ──────────────────────────────────────

def generate_token() -> str:
    return secrets.token_hex(32)


def issue_verification_token(user: User) -> str:
    """Attach a fresh verification token to `user`; the caller commits."""
    user.email_verification_token = generate_token()
    user.email_verification_expires = utc_now() + timedelta(hours=settings.EMAIL_VERIFICATION_EXPIRE_HOURS)
    if not settings.is_production:
        # no mail delivery; surface the link for local testing
        logger.debug("Verification link for %s: /api/auth/verify-email/%s", user.email, user.email_verification_token)
    return user.email_verification_token


def verify_email_token(db: Session, token: str) -> User:
    user = (
        db.query(User)
          .filter(User.email_verification_token == token, User.email_verified.is_(False))
          .first()
    )
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid or expired verification token"
        )
    if is_expired(user.email_verification_expires):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Verification token has expired. Please request a new one."
        )

    user.email_verified = True
    user.email_verification_token = None
    user.email_verification_expires = None
    db.commit()
    db.refresh(user)
    logger.info("Verified email for user %s", user.id)
    return user


def resend_verification(db: Session, email: str) -> None:
    user = get_user_by_email(db, email)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found"
        )
    if user.email_verified:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email is already verified"
        )
    if user.email_verification_token and not is_expired(user.email_verification_expires):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please wait before requesting another verification email"
        )

    issue_verification_token(user)
    db.commit()


def request_password_reset(db: Session, email: str) -> None:
    """Store a reset token when the account exists. Silent otherwise."""
    user = get_user_by_email(db, email)
    if not user:
        return
    user.password_reset_token = generate_token()
    user.password_reset_expires = utc_now() + timedelta(minutes=settings.PASSWORD_RESET_EXPIRE_MINUTES)
    db.commit()
    logger.info("Password reset requested for user %s", user.id)
    if not settings.is_production:
        logger.debug("Password reset token for %s: %s", user.email, user.password_reset_token)


def reset_password_with_token(db: Session, token: str, new_password: str) -> None:
    user = db.query(User).filter(User.password_reset_token == token).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid password reset token"
        )
    if is_expired(user.password_reset_expires):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Password reset token has expired. Please request a new one."
        )

    user.password_hash = hash_password(new_password)
    user.password_reset_token = None
    user.password_reset_expires = None
    db.commit()
    logger.info("Password reset for user %s", user.id)
