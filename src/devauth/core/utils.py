# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import re
from datetime import datetime, timezone
from typing import Tuple

# Local part and domain non-empty, no whitespace, dot in the domain, 3..255 chars.
EMAIL_RE = re.compile(r"^(?=.{3,255}$)[^\s@]+@[^\s@]+\.[^\s@]+$")


def normalize_email(email: str) -> str:
    """Canonicalise an email for lookups (trim + lower)."""
    return (email or "").strip().lower()


def is_valid_email(email_lower: str) -> bool:
    return bool(EMAIL_RE.match(email_lower or ""))


def split_full_name(full_name: str) -> Tuple[str, str]:
    """Split a free-form name into (first_name, last_name).

    The first whitespace token is the first name; the rest are joined by a
    single space. Either part may be ''.
    """
    parts = (full_name or "").split()
    if not parts:
        return "", ""
    return parts[0], " ".join(parts[1:])


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
