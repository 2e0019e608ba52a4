"""Shared fixtures: temporary SQLite database, upload dir, logged-in admin client."""

import asyncio
import os
import tempfile
from pathlib import Path

import pytest

# Настройки читаются при импорте docmanual, поэтому окружение задается заранее
_TMP_DIR = Path(tempfile.mkdtemp(prefix="docmanual-tests-"))
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_TMP_DIR / 'test.db'}"
os.environ["UPLOAD_DIR"] = str(_TMP_DIR / "uploads")
os.environ["STATIC_DIR"] = str(_TMP_DIR / "static")
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["GIT_AUTOCOMMIT"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"

from fastapi.testclient import TestClient  # noqa: E402

from docmanual.api.http.admin import get_git_sync  # noqa: E402
from docmanual.core.db import drop_db  # noqa: E402
from docmanual.main import app  # noqa: E402


class FakeGitSync:
    """Записывает сообщения коммитов вместо вызова git"""

    def __init__(self):
        self.messages = []

    def commit(self, message):
        self.messages.append(message)
        return True


@pytest.fixture
def upload_dir():
    return Path(os.environ["UPLOAD_DIR"])


@pytest.fixture
def git_sync():
    fake = FakeGitSync()
    app.dependency_overrides[get_git_sync] = lambda: fake
    yield fake
    app.dependency_overrides.pop(get_git_sync, None)


@pytest.fixture
def client(git_sync):
    """Клиент поверх чистой базы с администратором и стартовыми документами"""
    with TestClient(app) as test_client:
        yield test_client
    asyncio.run(drop_db())


@pytest.fixture
def admin_client(client):
    response = client.post("/api/login", json={"username": "admin", "password": "admin123"})
    assert response.status_code == 200
    return client
