# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from devauth.auth.session import Session
from devauth.auth.users import User


@dataclass(frozen=True)
class FlowResult:
    """Outcome of a registration or login: ok, or a user-facing message."""

    ok: bool
    message: str = ""
    user: Optional[User] = None
    session: Optional[Session] = None

    @classmethod
    def success(cls, *, user: Optional[User] = None, session: Optional[Session] = None) -> "FlowResult":
        return cls(ok=True, user=user, session=session)

    @classmethod
    def failure(cls, message: str) -> "FlowResult":
        return cls(ok=False, message=message)
