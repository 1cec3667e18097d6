# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool

from devauth.auth.passwords import hash_password
from devauth.auth.users import NewUser, User, UserDirectory
from devauth.core.errors import (
    MSG_INVALID_EMAIL,
    MSG_PASSWORD_TOO_SHORT,
    MSG_PASSWORDS_MISMATCH,
    MSG_REGISTRATION_FAILED,
    AuthError,
    DirectoryError,
    DuplicateAccountError,
    InputValidationError,
)
from devauth.core.utils import is_valid_email, normalize_email, split_full_name
from devauth.services.results import FlowResult

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 6

# Callers show the success message for this long before sending the user to login.
REDIRECT_DELAY_MS = 900


def validate_registration(*, email: str, password: str, confirm_password: str) -> str:
    """Check the form in order (first failure wins) and return the normalised email."""
    email_lower = normalize_email(email)
    if not is_valid_email(email_lower):
        raise InputValidationError(MSG_INVALID_EMAIL)
    if len(password or "") < MIN_PASSWORD_LENGTH:
        raise InputValidationError(MSG_PASSWORD_TOO_SHORT)
    if password != confirm_password:
        raise InputValidationError(MSG_PASSWORDS_MISMATCH)
    return email_lower


async def _register(
    directory: UserDirectory,
    *,
    full_name: str,
    email: str,
    password: str,
    confirm_password: str,
) -> User:
    email_lower = validate_registration(email=email, password=password, confirm_password=confirm_password)
    first_name, last_name = split_full_name(full_name)

    # Check-then-insert: two concurrent registrations can both pass this check.
    if await directory.find_by_email_lower(email_lower) is not None:
        raise DuplicateAccountError()

    password_hash = await run_in_threadpool(hash_password, password)
    return await directory.insert(
        NewUser(
            first_name=first_name,
            last_name=last_name,
            email=(email or "").strip(),
            email_lower=email_lower,
            password_hash=password_hash,
        )
    )


async def register_user(
    directory: UserDirectory,
    *,
    full_name: str,
    email: str,
    password: str,
    confirm_password: str,
) -> FlowResult:
    """Create an account.

    Returns a successful FlowResult carrying the new User, or a failed one whose
    message is ready to show. Never raises for validation, duplicates or
    store failures.
    """
    try:
        user = await _register(
            directory,
            full_name=full_name,
            email=email,
            password=password,
            confirm_password=confirm_password,
        )
    except AuthError as e:
        logger.info("Registration rejected: %s", e.message)
        return FlowResult.failure(e.message)
    except DirectoryError:
        logger.exception("Registration failed: user directory error")
        return FlowResult.failure(MSG_REGISTRATION_FAILED)
    except Exception:
        logger.exception("Registration failed: unexpected error")
        return FlowResult.failure(MSG_REGISTRATION_FAILED)

    logger.info("Registered user %s", user.id)
    return FlowResult.success(user=user)
