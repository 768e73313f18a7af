import os

# must be in place before config.settings is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-0123456789abcdef-0123456789"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DEMO_DATA"] = "false"
os.environ["ENVIRONMENT"] = "development"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from main import app
from config.database import build_engine, get_db
from database.init_db import init_db
from api.kid_profiles.kid_profiles_model import KidProfile
from api.parent_settings.parent_settings_model import ParentSettings
from api.user.user_model import User, UserRole
from api.user.user_service import hash_password
from helpers.token_helper import create_user_token


@pytest.fixture()
def engine():
    test_engine = build_engine("sqlite://", poolclass=StaticPool)
    init_db(
        bind=test_engine,
        session_factory=sessionmaker(bind=test_engine, autoflush=False),
        with_demo_data=False,
    )
    yield test_engine
    test_engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db_session(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def client(session_factory):
    def override_get_db():
        db = session_factory()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def make_user(session_factory):
    """Insert a user directly and hand back its id, token and auth headers."""
    counter = {"n": 0}

    def _make(role="parent", email=None, password="secret123", display_name="Test User"):
        counter["n"] += 1
        email = email or f"{role}{counter['n']}@example.com"
        with session_factory() as db:
            user = User(
                email=email,
                password_hash=hash_password(password),
                role=UserRole(role),
                display_name=display_name,
            )
            if user.role == UserRole.parent:
                user.settings = ParentSettings(content_filters=[], screen_time_limits={})
            db.add(user)
            db.commit()
            db.refresh(user)
            token = create_user_token(user)
            return {
                "id": user.id,
                "email": email,
                "password": password,
                "token": token,
                "headers": {"Authorization": f"Bearer {token}"},
            }

    return _make


@pytest.fixture()
def make_kid(session_factory):
    def _make(parent_id, display_name="Alex", age=7):
        with session_factory() as db:
            kid = KidProfile(parent_id=parent_id, display_name=display_name, age=age)
            db.add(kid)
            db.commit()
            return kid.id

    return _make


@pytest.fixture()
def parent(make_user):
    return make_user("parent", display_name="Sample Parent")


@pytest.fixture()
def other_parent(make_user):
    return make_user("parent", display_name="Other Parent")


@pytest.fixture()
def admin(make_user):
    return make_user("admin", display_name="System Admin")


@pytest.fixture()
def educator(make_user):
    return make_user("educator", display_name="Sample Teacher")


@pytest.fixture()
def kid_id(parent, make_kid):
    return make_kid(parent["id"])
