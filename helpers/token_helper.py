import jwt
import datetime
from typing import Any, Dict, Optional

from config.settings import settings  # must define SECRET_KEY and ALGORITHM
from api.user.user_model import User

def create_access_token(
    payload: Dict[str, Any],
    expires_days: Optional[int] = None,
) -> str:
    """
    Generate a JWT access token with the given payload and expiration.
    """
    days = expires_days if expires_days is not None else settings.ACCESS_TOKEN_EXPIRE_DAYS
    expire = datetime.datetime.now(datetime.timezone.utc) + datetime.timedelta(days=days)
    to_encode = payload.copy()
    to_encode.update({"exp": expire})

    token = jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)
    return token


def create_user_token(
    user: User,
    expires_days: Optional[int] = None
) -> str:
    """
    Generate a JWT for a User instance, embedding:
      - userId
      - email
      - role
      - displayName
      - exp (handled by create_access_token)
    """
    token_payload: Dict[str, Any] = {
        "userId":      user.id,
        "email":       user.email,
        "role":        user.role.value,
        "displayName": user.display_name,
    }
    return create_access_token(token_payload, expires_days)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Decode and verify a token. Raises jwt.ExpiredSignatureError or
    jwt.InvalidTokenError on failure.
    """
    return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
