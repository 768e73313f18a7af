# api/progress/learning_progress_model.py
import uuid
from sqlalchemy import Column, Integer, String, JSON, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from config.database import Base


class LearningProgress(Base):
    __tablename__ = "learning_progress"
    __table_args__ = (
        UniqueConstraint("child_id", "date", name="uq_learning_progress_child_date"),
    )

    id               = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    child_id         = Column(String(36), ForeignKey("kid_profiles.id", ondelete="CASCADE"), nullable=False, index=True)
    date             = Column(String(10), nullable=False)  # YYYY-MM-DD
    learning_minutes = Column(Integer, nullable=False, default=0, server_default="0")
    completed_items  = Column(JSON, nullable=False, default=list)
    quiz_scores      = Column(JSON, nullable=False, default=dict)
    # derived on read by the streak endpoint, never written
    streak_count     = Column(Integer, nullable=False, default=0, server_default="0")
    badges_earned    = Column(JSON, nullable=False, default=list)
    created_at       = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at       = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    child = relationship("KidProfile", back_populates="progress")

    def __repr__(self):
        return f"<LearningProgress(child_id={self.child_id}, date='{self.date}', minutes={self.learning_minutes})>"
