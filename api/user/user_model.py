# api/user/user_model.py
import enum
import uuid
from sqlalchemy import Column, String, Boolean, Enum, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from config.database import Base
from api.kid_profiles.kid_profiles_model import KidProfile
from api.parent_settings.parent_settings_model import ParentSettings

class UserRole(enum.Enum):
    parent   = 'parent'
    educator = 'educator'
    admin    = 'admin'

class User(Base):
    __tablename__ = 'users'

    id             = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email          = Column(String(255), nullable=False, unique=True, index=True)
    password_hash  = Column(String(255), nullable=False)
    role           = Column(Enum(UserRole), nullable=False)
    display_name   = Column(String(100), nullable=False)
    email_verified = Column(Boolean, nullable=False, default=False)
    # single-use tokens for email verification and password reset
    email_verification_token   = Column(String(64), nullable=True, index=True)
    email_verification_expires = Column(DateTime(timezone=True), nullable=True)
    password_reset_token       = Column(String(64), nullable=True, index=True)
    password_reset_expires     = Column(DateTime(timezone=True), nullable=True)
    created_at     = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at     = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # children managed by this parent
    kids = relationship(
        KidProfile,
        back_populates="parent",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by=KidProfile.created_at.desc(),
    )

    settings = relationship(
        ParentSettings,
        back_populates="parent",
        uselist=False,
        cascade="all, delete-orphan",
    )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin

    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}', role={self.role.value})>"
