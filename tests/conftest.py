# tests/conftest.py
import pytest

from models import Department, TeamMember

from .factories import NOW


@pytest.fixture()
def now():
    return NOW


@pytest.fixture()
def members():
    return [
        TeamMember(id="m1", name="Ada Lovelace", email="ada@example.com", role="Engineer"),
        TeamMember(id="m2", name="Grace Hopper", email="grace@example.com", role="Lead"),
    ]


@pytest.fixture()
def departments():
    return [
        Department(id="d1", name="Platform", color="#3B82F6"),
        Department(id="d2", name="Mobile", color="#10B981"),
        Department(id="d3", name="Data", color="#F59E0B"),
    ]


@pytest.fixture()
def database(tmp_path, monkeypatch):
    """db module bound to a throwaway SQLite file."""
    import db

    monkeypatch.setenv("PULSEBOARD_UPLOAD_DIR", str(tmp_path / "uploads"))
    db.configure(f"sqlite:///{tmp_path / 'test.db'}")
    db.init_db()
    yield db
    db.engine.dispose()


@pytest.fixture()
def owner(database):
    return database.login("owner@example.com", "Owner")["id"]
