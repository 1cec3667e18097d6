# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""User directory selection from the environment.

DEVAUTH_USER_DIRECTORY picks the implementation:
- "yaml": YamlUserDirectory on DEVAUTH_USERS_PATH (default)
- "mongodb": MongoUserDirectory on DEVAUTH_MONGODB_URL
- "inmemory": InMemoryUserDirectory (lost on restart)
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from devauth.auth.users import InMemoryUserDirectory, UserDirectory
from devauth.infra.yaml_directory import DEFAULT_USERS_PATH, YamlUserDirectory

logger = logging.getLogger(__name__)


def create_user_directory() -> UserDirectory:
    kind = os.getenv("DEVAUTH_USER_DIRECTORY", "yaml").strip().lower()

    if kind == "yaml":
        return YamlUserDirectory(DEFAULT_USERS_PATH)

    if kind == "mongodb":
        mongo_url = os.getenv("DEVAUTH_MONGODB_URL")
        if not mongo_url:
            raise ValueError(
                "DEVAUTH_MONGODB_URL environment variable is required "
                "when DEVAUTH_USER_DIRECTORY=mongodb"
            )
        # Lazy import: motor is only needed for this backend.
        from motor.motor_asyncio import AsyncIOMotorClient

        from devauth.infra.mongo_directory import MongoUserDirectory

        db_name = os.getenv("DEVAUTH_MONGODB_DATABASE", "devauth")
        coll_name = os.getenv("DEVAUTH_MONGODB_COLLECTION", "users")
        client = AsyncIOMotorClient(mongo_url, tz_aware=True)
        return MongoUserDirectory(client[db_name][coll_name])

    if kind == "inmemory":
        return InMemoryUserDirectory()

    raise ValueError(
        f"Invalid DEVAUTH_USER_DIRECTORY value: {kind}. "
        "Expected 'yaml', 'mongodb' or 'inmemory'"
    )


_directory: Optional[UserDirectory] = None


def get_user_directory() -> UserDirectory:
    """Process-wide directory, created on first use."""
    global _directory
    if _directory is None:
        _directory = create_user_directory()
        logger.info("User directory: %s", type(_directory).__name__)
    return _directory


def reset_user_directory() -> None:
    global _directory
    _directory = None
