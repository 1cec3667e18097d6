# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Protected-view gate over the session store.

A protected view hands its render function to ``guard``. Without a session the
render function is never called and the caller gets a ``Redirect`` to login.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, TypeVar, Union

from devauth.auth.session import Session, SessionStore

LOGIN_URL = "/login"

T = TypeVar("T")


@dataclass(frozen=True)
class Redirect:
    location: str


def guard(store: SessionStore, render: Callable[[Session], T]) -> Union[T, Redirect]:
    session = store.read()
    if session is None:
        return Redirect(LOGIN_URL)
    return render(session)


def logout(store: SessionStore) -> Redirect:
    store.clear()
    return Redirect(LOGIN_URL)
