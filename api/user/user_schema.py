from pydantic import BaseModel, ConfigDict, EmailStr, Field
from pydantic.alias_generators import to_camel
from typing import Optional, List, Literal
from datetime import datetime
from api.user.user_model import UserRole
from api.kid_profiles.kid_profiles_schema import KidProfileRead
from api.parent_settings.parent_settings_schema import ParentSettingsRead

# ----- Shared config -----
CAMEL_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    from_attributes=True,
)

# ----- Registration Schema -----
class UserRegister(BaseModel):
    email: EmailStr = Field(
        ...,
        description="A valid email address"
    )
    password: str = Field(
        ...,
        min_length=6,
        description="At least 6 characters"
    )
    display_name: str = Field(
        ...,
        min_length=2,
        max_length=100,
        description="Name shown in the parent and educator dashboards"
    )
    role: Literal["parent", "educator"] = Field(
        ...,
        description="Admins are never self-registered"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid"
    )

# ----- Response Schema -----
class UserResponse(BaseModel):
    id: str
    email: EmailStr
    role: UserRole
    display_name: str
    email_verified: bool = False
    created_at: Optional[datetime] = None

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        use_enum_values=True,
    )

class ProfileResponse(UserResponse):
    kids: Optional[List[KidProfileRead]] = None
    settings: Optional[ParentSettingsRead] = None

class ProfileUpdate(BaseModel):
    display_name: Optional[str] = Field(None, min_length=2, max_length=100)

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
        extra="forbid"
    )

# ----- Generic Response -----
class Message(BaseModel):
    message: str

# ----- Auth Schemas -----
class LoginRequest(BaseModel):
    email: EmailStr = Field(
        ..., description="Registered user email"
    )
    password: str = Field(
        ..., min_length=1, description="User password"
    )

    model_config = ConfigDict(extra="forbid")

class ChangePasswordRequest(BaseModel):
    current_password: str = Field(
        ..., min_length=1, description="Existing password"
    )
    new_password: str = Field(
        ..., min_length=6, description="New password"
    )

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid"
    )

class RegisterResponse(BaseModel):
    message: str
    user: UserResponse
    requires_verification: bool = True

    model_config = CAMEL_CONFIG

class TokenResponse(BaseModel):
    message: str
    user: UserResponse
    token: str

class RefreshResponse(BaseModel):
    message: str
    token: str

# ----- Verification & reset -----
class EmailRequest(BaseModel):
    email: EmailStr = Field(..., description="Account email")

    model_config = ConfigDict(extra="forbid")

class ResetPasswordRequest(BaseModel):
    token: str = Field(..., min_length=1, description="Token from the reset link")
    new_password: str = Field(..., min_length=6, description="New password")

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="forbid"
    )

class VerifyEmailResponse(BaseModel):
    message: str
    user: UserResponse
