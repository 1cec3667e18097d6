# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

from __future__ import annotations

import logging

from fastapi.concurrency import run_in_threadpool

from devauth.auth.passwords import dummy_hash, verify_password
from devauth.auth.session import Session, SessionStore
from devauth.auth.users import UserDirectory
from devauth.core.errors import (
    MSG_LOGIN_FAILED,
    AuthError,
    DirectoryError,
    InvalidCredentialsError,
)
from devauth.core.utils import normalize_email, utc_now
from devauth.services.results import FlowResult

logger = logging.getLogger(__name__)


async def _authenticate(directory: UserDirectory, email: str, password: str) -> Session:
    user = await directory.find_by_email_lower(normalize_email(email))
    # Unknown email and wrong password must look the same to the caller.
    if user is None:
        await run_in_threadpool(verify_password, dummy_hash(), password)
        raise InvalidCredentialsError()
    if not await run_in_threadpool(verify_password, user.password_hash, password):
        raise InvalidCredentialsError()
    return Session(
        user_id=user.id,
        email=user.email,
        first_name=user.first_name,
        signed_in_at=utc_now().isoformat(),
    )


async def login_user(
    directory: UserDirectory,
    store: SessionStore,
    *,
    email: str,
    password: str,
) -> FlowResult:
    """Check credentials and, on success, save a Session into *store*."""
    try:
        session = await _authenticate(directory, email, password)
    except AuthError as e:
        logger.info("Login rejected")
        return FlowResult.failure(e.message)
    except DirectoryError:
        logger.exception("Login failed: user directory error")
        return FlowResult.failure(MSG_LOGIN_FAILED)
    except Exception:
        logger.exception("Login failed: unexpected error")
        return FlowResult.failure(MSG_LOGIN_FAILED)

    store.save(session)
    logger.info("User %s signed in", session.user_id)
    return FlowResult.success(session=session)
