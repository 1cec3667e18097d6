# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

from typing import Optional

from fastapi import HTTPException, Request

from devauth.auth.gate import Redirect, guard
from devauth.auth.session import Session, cookie_session_store


def current_session_optional(request: Request) -> Optional[Session]:
    return cookie_session_store(request).read()


def require_session(request: Request) -> Session:
    outcome = guard(cookie_session_store(request), lambda session: session)
    if isinstance(outcome, Redirect):
        raise HTTPException(status_code=303, headers={"Location": outcome.location})
    return outcome
