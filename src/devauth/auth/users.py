# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import uuid
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional

from devauth.core.errors import MalformedUserRecord
from devauth.core.utils import utc_now


@dataclass(frozen=True)
class NewUser:
    """Insert payload: everything but the store-assigned id and createdAt."""

    first_name: str
    last_name: str
    email: str
    email_lower: str
    password_hash: str

    def to_document(self) -> Dict[str, Any]:
        return {
            "firstName": self.first_name,
            "lastName": self.last_name,
            "email": self.email,
            "emailLower": self.email_lower,
            "passwordHash": self.password_hash,
        }


@dataclass(frozen=True)
class User:
    id: str
    first_name: str
    last_name: str
    email: str
    email_lower: str
    password_hash: str
    created_at: datetime


def user_from_document(user_id: Any, doc: Mapping[str, Any]) -> User:
    """Convert a stored document into a User, rejecting records that break the schema."""
    if not isinstance(doc, Mapping):
        raise MalformedUserRecord(f"User {user_id!r}: document is not a mapping")
    uid = str(user_id or "").strip()
    if not uid:
        raise MalformedUserRecord("User document without id")

    missing = [k for k in ("email", "emailLower", "passwordHash", "createdAt") if not doc.get(k)]
    if missing:
        raise MalformedUserRecord(f"User {uid}: missing {', '.join(missing)}")

    created_at = doc["createdAt"]
    if isinstance(created_at, str):
        try:
            created_at = datetime.fromisoformat(created_at)
        except ValueError as e:
            raise MalformedUserRecord(f"User {uid}: bad createdAt {created_at!r}") from e
    if not isinstance(created_at, datetime):
        raise MalformedUserRecord(f"User {uid}: bad createdAt {created_at!r}")

    return User(
        id=uid,
        first_name=str(doc.get("firstName") or ""),
        last_name=str(doc.get("lastName") or ""),
        email=str(doc["email"]),
        email_lower=str(doc["emailLower"]),
        password_hash=str(doc["passwordHash"]),
        created_at=created_at,
    )


class UserDirectory(ABC):
    """Port to the external document store holding user records.

    Implementations raise ``DirectoryError`` when the store cannot be reached
    or returns something unusable.
    """

    @abstractmethod
    async def find_by_email_lower(self, email_lower: str) -> Optional[User]:
        """Return the first record whose emailLower equals *email_lower*, or None.

        The store has no unique index on emailLower. If duplicates exist,
        which one comes back is unspecified.
        """

    @abstractmethod
    async def insert(self, new_user: NewUser) -> User:
        """Persist *new_user* and return it with the store-assigned id and createdAt.

        No uniqueness check happens here; callers check first and accept the race.
        """


class InMemoryUserDirectory(UserDirectory):
    """Directory kept in a list, in insertion order. Used by tests and scripts."""

    def __init__(self) -> None:
        self._users: List[User] = []

    async def find_by_email_lower(self, email_lower: str) -> Optional[User]:
        for user in self._users:
            if user.email_lower == email_lower:
                return user
        return None

    async def insert(self, new_user: NewUser) -> User:
        user = User(
            id=uuid.uuid4().hex,
            first_name=new_user.first_name,
            last_name=new_user.last_name,
            email=new_user.email,
            email_lower=new_user.email_lower,
            password_hash=new_user.password_hash,
            created_at=utc_now(),
        )
        self._users.append(user)
        return user

    def count(self) -> int:
        return len(self._users)

    def clear(self) -> None:
        self._users.clear()
