# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging
import os
import uuid
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from fastapi.concurrency import run_in_threadpool

from devauth.auth.users import NewUser, User, UserDirectory, user_from_document
from devauth.core.errors import DirectoryError
from devauth.core.utils import utc_now

logger = logging.getLogger(__name__)

# IMPORTANT: do not rely on current working directory.
# Anchor the default users.yml path to the project root (works well with editable installs).
BASE_DIR = Path(__file__).resolve().parents[3]
DEFAULT_USERS_PATH = Path(
    os.getenv("DEVAUTH_USERS_PATH", str(BASE_DIR / "data" / "users.yml"))
).resolve()


def _empty() -> Dict[str, Any]:
    return {"version": 1, "users": {}}


class YamlUserDirectory(UserDirectory):
    """User directory backed by a single YAML document.

    Layout::

        version: 1
        users:
          <id>:
            firstName: ...
            emailLower: ...
            createdAt: 2026-01-01T00:00:00+00:00

    The file is re-read on every call so edits made by other processes are seen.
    """

    def __init__(self, path: Path = DEFAULT_USERS_PATH) -> None:
        self.path = Path(path)

    def _load(self) -> Dict[str, Any]:
        if not self.path.exists():
            return _empty()
        try:
            raw = yaml.safe_load(self.path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as e:
            raise DirectoryError(f"Cannot read {self.path}: {e}") from e
        if not isinstance(raw, dict):
            raise DirectoryError(f"{self.path} is not a YAML mapping")
        if not isinstance(raw.get("users"), dict):
            raw["users"] = {}
        return raw

    def _dump(self, raw: Dict[str, Any]) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(
                yaml.safe_dump(raw, sort_keys=False, allow_unicode=True),
                encoding="utf-8",
            )
        except OSError as e:
            raise DirectoryError(f"Cannot write {self.path}: {e}") from e

    async def find_by_email_lower(self, email_lower: str) -> Optional[User]:
        users = (await run_in_threadpool(self._load))["users"]
        for uid, doc in users.items():
            if isinstance(doc, dict) and doc.get("emailLower") == email_lower:
                return user_from_document(uid, doc)
        return None

    async def insert(self, new_user: NewUser) -> User:
        raw = await run_in_threadpool(self._load)
        uid = uuid.uuid4().hex
        doc = {**new_user.to_document(), "createdAt": utc_now()}
        raw["users"][uid] = doc
        await run_in_threadpool(self._dump, raw)
        logger.debug("Inserted user %s into %s", uid, self.path)
        return user_from_document(uid, doc)
