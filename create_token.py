#!/usr/bin/env python3
"""
Issue an access token for an existing account without its password.

Useful for manual API testing when ``EMPLOYEE_AUTH_REQUIRED`` is on.
The account is looked up in the configured document store and the
token is signed with ``SECRET_KEY``, exactly like a normal login.

Usage:
    python create_token.py --email admin@example.com --hours 24
"""

import argparse
import asyncio
import sys

from employee_directory_api.app.core.config import Settings
from employee_directory_api.app.core.db import get_database_path, init_db
from employee_directory_api.app.core.security import create_access_token
from employee_directory_api.app.repositories.sqlite_collection import SQLiteCollection


async def issue_token(settings: Settings, email: str, hours: float) -> str:
    database_path = get_database_path(settings.database_url)
    init_db(database_path)
    accounts = SQLiteCollection(database_path, "accounts")
    account = await accounts.find_one({"email": email})
    if not account:
        raise LookupError(f"No account registered for {email}")
    return create_access_token(
        {"sub": account["id"], "user_id": account["id"], "email": account["email"]},
        settings.secret_key,
        expires_delta=int(hours * 3600),
        algorithm=settings.algorithm,
    )


def main() -> None:
    ap = argparse.ArgumentParser(description="Issue an access token for an account.")
    ap.add_argument("--email", required=True, help="Email of a registered account")
    ap.add_argument("--hours", type=float, default=1.0, help="Token lifetime in hours (default 1)")
    args = ap.parse_args()

    try:
        token = asyncio.run(issue_token(Settings(), args.email, args.hours))
    except LookupError as exc:
        print(f"[!] {exc}", file=sys.stderr)
        sys.exit(1)
    print(token)


if __name__ == "__main__":
    main()
