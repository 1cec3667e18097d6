# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Mapping, Optional

from itsdangerous import BadSignature, URLSafeSerializer

SESSION_SLOT = os.getenv("DEVAUTH_COOKIE_NAME", "user_data")
# Cookie lifetime only (browsers cap it at 400 days); sessions carry no expiry of their own.
DEFAULT_MAX_AGE_SECONDS = int(os.getenv("DEVAUTH_SESSION_MAX_AGE", str(400 * 24 * 3600)))


@dataclass(frozen=True)
class Session:
    user_id: str
    email: str
    first_name: str
    signed_in_at: str  # ISO-8601

    @property
    def display_name(self) -> str:
        return self.first_name or self.email

    def to_dict(self) -> Dict[str, str]:
        return {
            "userId": self.user_id,
            "email": self.email,
            "firstName": self.first_name,
            "signedInAt": self.signed_in_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> Optional["Session"]:
        """Build a Session from its JSON shape; None if anything is off."""
        if not isinstance(data, Mapping):
            return None
        values = {k: data.get(k) for k in ("userId", "email", "firstName", "signedInAt")}
        if not all(isinstance(v, str) for v in values.values()):
            return None
        if not values["userId"] or not values["email"]:
            return None
        stamp = values["signedInAt"]
        try:
            datetime.fromisoformat(stamp[:-1] + "+00:00" if stamp.endswith("Z") else stamp)
        except ValueError:
            return None
        return cls(
            user_id=values["userId"],
            email=values["email"],
            first_name=values["firstName"],
            signed_in_at=stamp,
        )


class Slots(ABC):
    """Named string slots in client-local storage."""

    @abstractmethod
    def get(self, name: str) -> Optional[str]: ...

    @abstractmethod
    def set(self, name: str, value: str) -> None: ...

    @abstractmethod
    def delete(self, name: str) -> None: ...


class MemorySlots(Slots):
    def __init__(self, data: Optional[Dict[str, str]] = None) -> None:
        self.data: Dict[str, str] = data if data is not None else {}

    def get(self, name: str) -> Optional[str]:
        return self.data.get(name)

    def set(self, name: str, value: str) -> None:
        self.data[name] = value

    def delete(self, name: str) -> None:
        self.data.pop(name, None)


def _serializer() -> URLSafeSerializer:
    secret = os.getenv("SECRET_KEY") or os.getenv("DEVAUTH_SECRET_KEY")
    if not secret:
        raise RuntimeError("Missing SECRET_KEY (or DEVAUTH_SECRET_KEY) in environment")
    salt = os.getenv("DEVAUTH_SESSION_SALT", "devauth.session.v1")
    return URLSafeSerializer(secret_key=secret, salt=salt)


def cookie_settings() -> dict:
    secure = os.getenv("DEVAUTH_COOKIE_SECURE", "false").lower() in {"1", "true", "yes", "y"}
    return {"httponly": True, "samesite": "lax", "secure": secure, "max_age": DEFAULT_MAX_AGE_SECONDS}


class CookieSlots(Slots):
    """Slots stored as signed browser cookies.

    Reads come from the incoming request; writes go to *response*. Writes are
    also remembered locally so a read later in the same request sees them.
    """

    def __init__(self, request: Any, response: Any = None) -> None:
        self.request = request
        self.response = response
        self._pending: Dict[str, Optional[str]] = {}
        self._s = _serializer()

    def get(self, name: str) -> Optional[str]:
        if name in self._pending:
            return self._pending[name]
        token = self.request.cookies.get(name, "")
        if not token:
            return None
        try:
            value = self._s.loads(token)
        except BadSignature:
            return None
        return value if isinstance(value, str) else None

    def set(self, name: str, value: str) -> None:
        if self.response is None:
            raise RuntimeError("CookieSlots needs a response to write cookies")
        self._pending[name] = value
        self.response.set_cookie(name, self._s.dumps(value), **cookie_settings())

    def delete(self, name: str) -> None:
        if self.response is None:
            raise RuntimeError("CookieSlots needs a response to write cookies")
        self._pending[name] = None
        self.response.delete_cookie(name)


class SessionStore:
    """Keeps the current Session as JSON in one named slot.

    No locking: the last save wins and a read is a snapshot. There is no
    expiry; a session lasts until ``clear()``.
    """

    def __init__(self, slots: Slots, name: str = SESSION_SLOT) -> None:
        self.slots = slots
        self.name = name

    def save(self, session: Session) -> None:
        self.slots.set(self.name, json.dumps(session.to_dict()))

    def read(self) -> Optional[Session]:
        raw = self.slots.get(self.name)
        if not raw:
            return None
        try:
            data = json.loads(raw)
        except ValueError:
            return None
        return Session.from_dict(data)

    def clear(self) -> None:
        self.slots.delete(self.name)


def memory_session_store(data: Optional[Dict[str, str]] = None) -> SessionStore:
    return SessionStore(MemorySlots(data))


def cookie_session_store(request: Any, response: Any = None) -> SessionStore:
    return SessionStore(CookieSlots(request, response))
