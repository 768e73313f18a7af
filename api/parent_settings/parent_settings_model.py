from sqlalchemy import Column, Integer, String, JSON, ForeignKey, DateTime, func
from sqlalchemy.orm import relationship

from config.database import Base


class ParentSettings(Base):
    __tablename__ = "parent_settings"

    # one settings row per parent
    parent_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )

    daily_learning_minutes = Column(Integer, nullable=False, default=30, server_default="30")
    fun_unlock_minutes     = Column(Integer, nullable=False, default=15, server_default="15")
    content_filters        = Column(JSON, nullable=False, default=list)
    screen_time_limits     = Column(JSON, nullable=False, default=dict)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    parent = relationship(
        "User",
        back_populates="settings",
        uselist=False,
    )
