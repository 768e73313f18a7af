# badges_model.py
import uuid
from sqlalchemy import Column, String, Text, JSON, DateTime, func
from config.database import Base

class Badge(Base):
    __tablename__ = "badges"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    name = Column(String(50), unique=True, nullable=False)
    description = Column(Text, nullable=True)
    icon_url = Column(String(255), nullable=True)
    # e.g. {"stories_read": 1}; any satisfied threshold awards the badge
    criteria = Column(JSON, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    def __repr__(self):
        return f"<Badge(id={self.id}, name='{self.name}')>"
