# api/kid_profiles/kid_profiles_model.py
import enum
import uuid
from sqlalchemy import Column, Integer, String, Enum, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship
from config.database import Base
from api.progress.learning_progress_model import LearningProgress


class LearningLevel(enum.Enum):
    beginner     = 'beginner'
    intermediate = 'intermediate'
    advanced     = 'advanced'


class KidProfile(Base):
    __tablename__ = "kid_profiles"

    id             = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    parent_id      = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    display_name   = Column(String(50), nullable=False)
    age            = Column(Integer, nullable=False)
    avatar_color   = Column(String(7), nullable=False, default="#3b82f6")
    learning_level = Column(Enum(LearningLevel), nullable=False, default=LearningLevel.beginner)
    created_at     = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at     = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    parent = relationship("User", back_populates="kids")

    progress = relationship(
        LearningProgress,
        back_populates="child",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<KidProfile(id={self.id}, display_name='{self.display_name}')>"
