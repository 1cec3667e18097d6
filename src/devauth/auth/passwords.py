# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import os
import secrets
from functools import lru_cache

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

# argon2-cffi defaults; each is tunable from the environment.
_TIME_COST = int(os.getenv("DEVAUTH_HASH_TIME_COST", "3"))
_MEMORY_COST = int(os.getenv("DEVAUTH_HASH_MEMORY_COST", "65536"))  # KiB
_PARALLELISM = int(os.getenv("DEVAUTH_HASH_PARALLELISM", "4"))

_PH = PasswordHasher(
    time_cost=_TIME_COST,
    memory_cost=_MEMORY_COST,
    parallelism=_PARALLELISM,
)


def hash_password(plain: str) -> str:
    """Return a self-describing argon2id token ($argon2id$v=..$m=..,t=..,p=..$salt$digest)."""
    if not plain:
        raise ValueError("Empty password")
    return _PH.hash(plain)


@lru_cache(maxsize=1)
def dummy_hash() -> str:
    """Hash of a random secret; login verifies against it when no user matches the email."""
    return _PH.hash(secrets.token_urlsafe(16))


def verify_password(hash_value: str, plain: str) -> bool:
    """True only if *plain* matches *hash_value*; any malformed input is a plain False."""
    if not hash_value or not plain:
        return False
    try:
        return _PH.verify(hash_value, plain)
    except (VerificationError, InvalidHashError, UnicodeError):
        return False
