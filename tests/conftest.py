import os
import sys
from pathlib import Path as _Path
sys.path.insert(0, str(_Path(__file__).resolve().parents[1] / "src"))

# Cheap argon2 parameters for the test run; must be set before devauth.auth.passwords is imported.
os.environ.setdefault("DEVAUTH_HASH_TIME_COST", "1")
os.environ.setdefault("DEVAUTH_HASH_MEMORY_COST", "8192")
os.environ.setdefault("DEVAUTH_HASH_PARALLELISM", "1")

from pathlib import Path
from typing import Optional

import pytest

from devauth.auth.session import SessionStore, memory_session_store
from devauth.auth.users import InMemoryUserDirectory, NewUser, User, UserDirectory
from devauth.core.errors import DirectoryError


class RecordingDirectory(InMemoryUserDirectory):
    """In-memory directory that counts gateway calls."""

    def __init__(self) -> None:
        super().__init__()
        self.find_calls = 0
        self.insert_calls = 0

    async def find_by_email_lower(self, email_lower: str) -> Optional[User]:
        self.find_calls += 1
        return await super().find_by_email_lower(email_lower)

    async def insert(self, new_user: NewUser) -> User:
        self.insert_calls += 1
        return await super().insert(new_user)


class BrokenDirectory(UserDirectory):
    """Directory whose store is unreachable."""

    async def find_by_email_lower(self, email_lower: str) -> Optional[User]:
        raise DirectoryError("connection refused")

    async def insert(self, new_user: NewUser) -> User:
        raise DirectoryError("connection refused")


@pytest.fixture()
def directory() -> RecordingDirectory:
    return RecordingDirectory()


@pytest.fixture()
def broken_directory() -> BrokenDirectory:
    return BrokenDirectory()


@pytest.fixture()
def session_store() -> SessionStore:
    return memory_session_store()


@pytest.fixture()
def secret_key(monkeypatch) -> str:
    monkeypatch.setenv("SECRET_KEY", "test-secret-key")
    return "test-secret-key"


@pytest.fixture()
def users_path(tmp_path: Path) -> Path:
    return tmp_path / "data" / "users.yml"


@pytest.fixture()
def ada_form() -> dict:
    return {
        "full_name": "Ada Lovelace",
        "email": "Ada@X.com",
        "password": "secret1",
        "confirm_password": "secret1",
    }
