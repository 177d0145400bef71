"""
Shared fixtures. Every test runs against a fresh in-memory SQLite database.
"""

import os

# Must be set before icebreaker.core.config is imported
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SEED_ON_STARTUP"] = "false"
os.environ.pop("ADMIN_PASSWORD", None)

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from icebreaker import models  # noqa
from icebreaker.core.config import settings
from icebreaker.core.security import get_current_admin
from icebreaker.db.base import Base
from icebreaker.db.init_db import seed_questions
from icebreaker.db.session import get_db
from icebreaker.main import app
from icebreaker.models.admin import Admin
from icebreaker.models.category import Category
from icebreaker.models.match import Match
from icebreaker.models.question import Question

TEST_DATABASE_URL = "sqlite://"


@pytest.fixture(scope="function")
def db_session():
    """Create a test database session."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
        Base.metadata.drop_all(bind=engine)
        engine.dispose()


@pytest.fixture(autouse=True)
def reports_dir(tmp_path, monkeypatch):
    """Write generated PDFs into a per-test directory."""
    path = tmp_path / "reports"
    monkeypatch.setattr(settings, "REPORTS_DIR", str(path))
    return path


@pytest.fixture
def seeded(db_session):
    """The built-in question catalog (3 categories per role)."""
    seed_questions(db_session)
    return db_session


@pytest.fixture
def make_match(db_session):
    counter = {"n": 0}

    def _make(match_id: str | None = None, status: str = "waiting", **fields) -> Match:
        counter["n"] += 1
        match = Match(
            id=match_id or f"match-{counter['n']}",
            teacher_name=fields.pop("teacher_name", "Kim Teacher"),
            teacher_phone=fields.pop("teacher_phone", "010-1111-2222"),
            student_name=fields.pop("student_name", "Lee Student"),
            student_phone=fields.pop("student_phone", "010-3333-4444"),
            status=status,
            **fields,
        )
        db_session.add(match)
        db_session.commit()
        db_session.refresh(match)
        return match

    return _make


@pytest.fixture
def make_category(db_session):
    def _make(role: str, name: str, texts: list[str], inactive: int = 0) -> Category:
        category = Category(role=role, name=name)
        db_session.add(category)
        db_session.flush()
        for index, text in enumerate(texts):
            db_session.add(
                Question(
                    category_id=category.id,
                    question_text=text,
                    is_active=index >= inactive,
                )
            )
        db_session.commit()
        db_session.refresh(category)
        return category

    return _make


@pytest.fixture
def admin(db_session):
    admin = Admin(
        username="admin",
        # Pre-hashed password to avoid running bcrypt in tests
        password_hash="$2b$12$hashed_password_001",
    )
    db_session.add(admin)
    db_session.commit()
    db_session.refresh(admin)
    return admin


@pytest.fixture
def anonymous_client(db_session):
    app.dependency_overrides[get_db] = lambda: db_session
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def client(db_session, admin):
    app.dependency_overrides[get_db] = lambda: db_session
    app.dependency_overrides[get_current_admin] = lambda: admin
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
