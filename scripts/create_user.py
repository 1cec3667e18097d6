#!/usr/bin/env python3
from __future__ import annotations

import asyncio
from getpass import getpass

from devauth.infra.directory_factory import get_user_directory
from devauth.services.registration import register_user


def main() -> None:
    directory = get_user_directory()

    full_name = input("Full name: ").strip()
    email = input("Email: ").strip()
    pw1 = getpass("Password: ")
    pw2 = getpass("Repeat password: ")

    result = asyncio.run(
        register_user(
            directory,
            full_name=full_name,
            email=email,
            password=pw1,
            confirm_password=pw2,
        )
    )
    if not result.ok:
        raise SystemExit(result.message)
    print(f"OK -> {result.user.email_lower} ({result.user.id})")


if __name__ == "__main__":
    main()
