# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""MongoDB user directory (motor)."""

from __future__ import annotations

import logging
from typing import Any, Optional

from pymongo.errors import PyMongoError

from devauth.auth.users import NewUser, User, UserDirectory, user_from_document
from devauth.core.errors import DirectoryError
from devauth.core.utils import utc_now

logger = logging.getLogger(__name__)


class MongoUserDirectory(UserDirectory):
    """Users stored as documents in one collection.

    Documents use the camelCase field names (firstName, emailLower, ...).
    The Mongo ``_id`` is exposed as ``User.id`` in string form. There is no
    unique index on emailLower; ``find_one`` returns whichever match the
    server hands back first.

    Examples:
        >>> directory = MongoUserDirectory(client["devauth"]["users"])
        >>> user = await directory.find_by_email_lower("ada@x.com")
    """

    def __init__(self, collection: Any) -> None:
        """Initialize with a motor collection (or anything with async find_one/insert_one)."""
        self.collection = collection

    async def find_by_email_lower(self, email_lower: str) -> Optional[User]:
        try:
            document = await self.collection.find_one({"emailLower": email_lower})
        except PyMongoError as e:
            raise DirectoryError(f"User lookup failed: {e}") from e

        if not document:
            return None

        return user_from_document(document.get("_id"), document)

    async def insert(self, new_user: NewUser) -> User:
        document = {**new_user.to_document(), "createdAt": utc_now()}
        try:
            result = await self.collection.insert_one(document)
        except PyMongoError as e:
            raise DirectoryError(f"User insert failed: {e}") from e

        logger.debug("Inserted user %s", result.inserted_id)
        return user_from_document(result.inserted_id, document)
