from datetime import date

import pytest
from fastapi.testclient import TestClient

import db
from main import app
from routes.deps import get_today


@pytest.fixture
def db_file(tmp_path, monkeypatch):
    """Point the store at a fresh DuckDB file with the schema applied."""
    path = str(tmp_path / "budget-test.duckdb")
    monkeypatch.setattr(db, "DB_FILE", path)
    db.init_db()
    return path


@pytest.fixture
def today():
    return date(2025, 2, 10)


@pytest.fixture
def client(db_file, today):
    app.dependency_overrides[get_today] = lambda: today
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture
def user_headers():
    return {"X-User-Id": "user-1"}
