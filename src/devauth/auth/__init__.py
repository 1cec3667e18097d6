# Copyright (C) 2026 Bernardo Gómez Bey
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Authentication building blocks.

This package provides:
- Password hashing/verification (argon2)
- The user directory port plus the User / NewUser record types
- The client-side session record, its store and the protected-view gate
"""
