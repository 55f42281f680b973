"""
Shared test fixtures and utilities.

Environment is set before the application is imported so the cached
settings see a test database and secret.
"""

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-for-testing-only"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="noticeboard-uploads-")
os.environ["PUBLIC_BASE_URL"] = "http://testserver"
os.environ["ENVIRONMENT"] = "test"
os.environ["DEFAULT_ADMIN_EMAIL"] = ""
os.environ["DEFAULT_ADMIN_PASSWORD"] = ""

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from app.application.services.auth_service import create_user  # noqa: E402
from app.application.services.token_service import create_access_token  # noqa: E402
from app.domain.models.user import User  # noqa: E402
from app.infrastructure.database import Base, SessionLocal, create_tables, get_engine, init_engine  # noqa: E402
from app.infrastructure.repositories.user_repository import SQLAlchemyUserRepository  # noqa: E402
from app.main import app  # noqa: E402

TEST_PASSWORD = "password123"


def bearer(user: User) -> dict:
    """Authorization header for ``user``."""
    return {"Authorization": f"Bearer {create_access_token(user.id)}"}


@pytest.fixture(autouse=True)
def database():
    """Fresh in-memory database for every test."""
    init_engine("sqlite://")
    create_tables()
    yield
    Base.metadata.drop_all(bind=get_engine())


@pytest.fixture
def db():
    session = SessionLocal()
    yield session
    session.close()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_user(db):
    """Factory creating persisted users."""
    repo = SQLAlchemyUserRepository(db, User)

    def _make(email: str, role: str = "user", first_name: str = "Test", last_name: str = "User") -> User:
        return create_user(repo, email, TEST_PASSWORD, first_name, last_name, role=role)

    return _make


@pytest.fixture
def user(make_user) -> User:
    return make_user("alice@example.com", first_name="Alice", last_name="Smith")


@pytest.fixture
def other_user(make_user) -> User:
    return make_user("bob@example.com", first_name="Bob", last_name="Jones")


@pytest.fixture
def moderator(make_user) -> User:
    return make_user("mod@example.com", role="moderator", first_name="Mia", last_name="Mod")


@pytest.fixture
def admin(make_user) -> User:
    return make_user("admin@example.com", role="admin", first_name="Ada", last_name="Admin")


@pytest.fixture
def user_headers(user) -> dict:
    return bearer(user)


@pytest.fixture
def other_headers(other_user) -> dict:
    return bearer(other_user)


@pytest.fixture
def moderator_headers(moderator) -> dict:
    return bearer(moderator)


@pytest.fixture
def admin_headers(admin) -> dict:
    return bearer(admin)
