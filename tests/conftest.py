import os
import sys
import tempfile
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Ensure predictable environment variables for tests before importing the app.
BASE_DIR = Path(__file__).resolve().parents[1]
TEST_DB_PATH = BASE_DIR / "test.db"
TEST_UPLOAD_DIR = Path(tempfile.mkdtemp(prefix="portfolio-uploads-"))

if str(BASE_DIR) not in sys.path:
    sys.path.insert(0, str(BASE_DIR))

if TEST_DB_PATH.exists():
    TEST_DB_PATH.unlink()

os.environ.setdefault("DATABASE_URL", f"sqlite:///{TEST_DB_PATH}")
os.environ.setdefault("JWT_SECRET", "test-secret")
os.environ.setdefault("APP_ENV", "test")
os.environ.setdefault("UPLOAD_DIR", str(TEST_UPLOAD_DIR))
os.environ.setdefault("RATE_LIMIT_MAX", "100000")
os.environ.setdefault("MAX_UPLOAD_SIZE_MB", "1")

import portfolio_api.main as main  # noqa: E402  (import after env vars are set)
from portfolio_api.config import settings  # noqa: E402
from portfolio_api.database import Base, SessionLocal, engine  # noqa: E402
from portfolio_api.models.user import User  # noqa: E402
from portfolio_api.services.auth_service import hash_password, token_for_user  # noqa: E402

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture(autouse=True)
def clean_database():
    yield
    with engine.begin() as connection:
        for table in reversed(Base.metadata.sorted_tables):
            connection.execute(table.delete())


@pytest.fixture()
def client(monkeypatch):
    """Provide a TestClient with startup seeding patched out for isolation."""
    monkeypatch.setattr(main, "run_seed", lambda: None)

    with TestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def db_session():
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()


def _create_user(email: str, password: str, role: str) -> User:
    session = SessionLocal()
    try:
        user = User(email=email, password_hash=hash_password(password), role=role)
        session.add(user)
        session.commit()
        session.refresh(user)
        session.expunge(user)
        return user
    finally:
        session.close()


@pytest.fixture()
def admin_user():
    return _create_user("admin@example.com", "admin-pass-123", "admin")


@pytest.fixture()
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {token_for_user(admin_user)}"}


@pytest.fixture()
def user_headers():
    user = _create_user("viewer@example.com", "viewer-pass-123", "user")
    return {"Authorization": f"Bearer {token_for_user(user)}"}


@pytest.fixture()
def png_upload():
    """Build a ``files=`` mapping for a small PNG under the given field name."""

    def _build(field: str, filename: str = "photo.png", content: bytes = PNG_BYTES, content_type: str = "image/png"):
        return {field: (filename, content, content_type)}

    return _build


@pytest.fixture()
def stored_file():
    """Map a returned '/uploads/...' path to the file on disk."""

    def _resolve(public_path: str) -> Path:
        return settings.UPLOAD_DIR / public_path.split("/uploads/", 1)[1]

    return _resolve


@pytest.fixture()
def upload_files():
    """Snapshot the names of files currently in the upload directory."""

    def _snapshot() -> set[str]:
        return {path.name for path in settings.UPLOAD_DIR.iterdir() if path.is_file()}

    return _snapshot
