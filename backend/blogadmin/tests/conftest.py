"""
Test configuration and fixtures.

Every test gets its own in-memory SQLite database, so services can commit
and roll back for real without leaking rows into other tests.

Shared fixtures:
- db_session: session on a fresh database (expire_on_commit=False, like
  the application session factory)
- make_user / make_tag / make_category: committed fixture rows
- admin_actor / editor_actor: acting identities
- make_yaml_config: factory for admin_settings.yml variants
"""

import os
import tempfile
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Generator

import pytest
import yaml
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool

from blogadmin.config.admin_settings import reset_admin_settings
from blogadmin.db_base import Base
from blogadmin.models import User, Tag, Category
from blogadmin.platform.actor import Actor

# Set test environment
os.environ.setdefault("ENV", "test")

ADMIN_ID = "00000000-0000-4000-8000-00000000a001"
EDITOR_ID = "00000000-0000-4000-8000-00000000e001"

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def db_engine():
    """Fresh in-memory database with every table created."""
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)

    yield engine

    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine) -> Generator[Session, None, None]:
    SessionLocal = sessionmaker(
        autocommit=False,
        autoflush=False,
        expire_on_commit=False,
        bind=db_engine,
    )
    session = SessionLocal()

    yield session

    session.close()


@pytest.fixture(autouse=True)
def _admin_settings(monkeypatch):
    """Load the repository's admin_settings.yml fresh for each test."""
    monkeypatch.delenv("ADMIN_SETTINGS_PATH", raising=False)
    reset_admin_settings()
    yield
    reset_admin_settings()


# =============================================================================
# Actors
# =============================================================================

@pytest.fixture
def admin_actor() -> Actor:
    return Actor(id=ADMIN_ID, role="admin")


@pytest.fixture
def editor_actor() -> Actor:
    return Actor(id=EDITOR_ID, role="editor")


# =============================================================================
# Row factories
# =============================================================================

@pytest.fixture
def make_user(db_session):
    def _make(email: str = "ada@example.com", **kwargs) -> User:
        user = User(
            email=email,
            first_name=kwargs.pop("first_name", "Ada"),
            last_name=kwargs.pop("last_name", "Lovelace"),
            role=kwargs.pop("role", "editor"),
            **kwargs,
        )
        db_session.add(user)
        db_session.commit()
        return user
    return _make


@pytest.fixture
def make_tag(db_session):
    def _make(name: str, **kwargs) -> Tag:
        tag = Tag(name=name, **kwargs)
        db_session.add(tag)
        db_session.commit()
        return tag
    return _make


@pytest.fixture
def make_category(db_session):
    def _make(name: str, **kwargs) -> Category:
        category = Category(name=name, **kwargs)
        db_session.add(category)
        db_session.commit()
        return category
    return _make


@pytest.fixture
def set_created_at(db_session):
    """
    Pin created_at of a record to BASE_TIME + offset.

    Rows inserted in quick succession can share a timestamp; tests that
    depend on ordering pin it explicitly.
    """
    def _set(model, record_id: str, days: int = 0, minutes: int = 0):
        record = db_session.get(model, record_id)
        record.created_at = BASE_TIME + timedelta(days=days, minutes=minutes)
        db_session.commit()
        return record
    return _set


# =============================================================================
# Config fixtures
# =============================================================================

@pytest.fixture
def temp_config_dir():
    """Create a temporary directory for YAML config files."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def make_yaml_config(temp_config_dir):
    """
    Factory fixture that writes a YAML config file and returns its path.

    Usage:
        config_path = make_yaml_config("admin_settings.yml", {"admin_roles": [...]})
    """
    def _make(filename: str, config: dict) -> Path:
        config_path = temp_config_dir / filename
        with open(config_path, "w") as f:
            yaml.dump(config, f)
        return config_path
    return _make
