import logging

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from models.index import Base, engine as default_engine, SessionLocal
from api.badges.badges_service import BadgeService
from api.kid_profiles.kid_profiles_model import KidProfile, LearningLevel
from api.parent_settings.parent_settings_model import ParentSettings
from api.user.user_model import User, UserRole
from api.user.user_service import hash_password
from config.settings import settings

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("admin-1", "admin@cre8kids.com", "admin123", UserRole.admin, "System Admin"),
    ("parent-1", "parent@example.com", "parent123", UserRole.parent, "Sample Parent"),
    ("educator-1", "teacher@school.com", "educator123", UserRole.educator, "Sample Teacher"),
]


def create_tables(bind: Engine = None) -> None:
    Base.metadata.create_all(bind=bind or default_engine)


def seed_demo_data(db: Session) -> bool:
    """Sample accounts and one child; skipped once any user exists."""
    if db.query(User).count() > 0:
        logger.info("Database already has users, skipping demo seed")
        return False

    for user_id, email, password, role, name in DEMO_USERS:
        db.add(User(
            id=user_id,
            email=email,
            password_hash=hash_password(password),
            role=role,
            display_name=name,
            email_verified=True,
        ))
    db.flush()
    db.add(ParentSettings(parent_id="parent-1", daily_learning_minutes=30, fun_unlock_minutes=15))
    db.add(KidProfile(
        id="kid-1",
        parent_id="parent-1",
        display_name="Alex",
        age=7,
        avatar_color="#3b82f6",
        learning_level=LearningLevel.intermediate,
    ))
    db.commit()
    logger.info("Seeded demo accounts")
    return True


def init_db(bind: Engine = None, session_factory=None, with_demo_data: bool = None) -> None:
    if with_demo_data is None:
        with_demo_data = settings.SEED_DEMO_DATA

    create_tables(bind)
    db = (session_factory or SessionLocal)()
    try:
        BadgeService(db).seed_default_badges()
        if with_demo_data:
            seed_demo_data(db)
    finally:
        db.close()


if __name__ == "__main__":
    from config.logging_config import setup_logging
    setup_logging()
    init_db()
    logger.info("Database initialized")
