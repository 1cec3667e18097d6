# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""User-facing failure messages and the exceptions that carry them.

Flows raise these internally; the flow boundary turns them into a
``FlowResult`` so callers only ever see the message text.
"""

from __future__ import annotations

MSG_INVALID_EMAIL = "Please enter a valid email."
MSG_PASSWORD_TOO_SHORT = "Password must be at least 6 characters."
MSG_PASSWORDS_MISMATCH = "Passwords do not match."
MSG_ACCOUNT_EXISTS = "An account with this email already exists."
MSG_REGISTRATION_FAILED = "Registration failed."

# Same text for unknown email and wrong password (no account enumeration).
MSG_INVALID_CREDENTIALS = "Invalid email or password."
MSG_LOGIN_FAILED = "Login failed."


class AuthError(Exception):
    """Base class for failures that end a flow with a user-facing message."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class InputValidationError(AuthError):
    """Malformed email, short password or mismatched confirmation."""


class DuplicateAccountError(AuthError):
    def __init__(self) -> None:
        super().__init__(MSG_ACCOUNT_EXISTS)


class InvalidCredentialsError(AuthError):
    def __init__(self) -> None:
        super().__init__(MSG_INVALID_CREDENTIALS)


class DirectoryError(Exception):
    """The user directory (document store) could not serve a lookup or insert."""


class MalformedUserRecord(DirectoryError):
    """A stored user document does not fit the User schema."""
