# Import every mapped class so Base.metadata knows all tables and string
# relationship targets resolve before the first query.
from config.database import engine, SessionLocal, Base
from api.progress.learning_progress_model import LearningProgress
from api.kid_profiles.kid_profiles_model import KidProfile
from api.parent_settings.parent_settings_model import ParentSettings
from api.user.user_model import User
from api.badges.badges_model import Badge

models = {
    model.__tablename__: model
    for model in (User, KidProfile, ParentSettings, LearningProgress, Badge)
}

# Exporting components
__all__ = ["engine", "SessionLocal", "Base", "models"]
