#!/usr/bin/env python3
"""Create the first administrator account.

Creates the database tables if needed, then an active, verified admin.
Does nothing when an admin already exists, unless --force is given.

Usage:
    python scripts/create_admin.py --email admin@example.com --password secret
"""

import argparse
import getpass
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from sqlmodel import Session  # noqa: E402

from chromepass.core.exceptions import AppException  # noqa: E402
from chromepass.db.engine import engine, init_db  # noqa: E402
from chromepass.user.models import UserRole, UserState  # noqa: E402
from chromepass.user.repository import UserRepository  # noqa: E402
from chromepass.user.service import UserService  # noqa: E402


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", help="prompted for when omitted")
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    parser.add_argument(
        "--force",
        action="store_true",
        help="create the account even if another admin exists",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    password = args.password or getpass.getpass("Password: ")
    if len(password) < 6:
        print("Password must be at least 6 characters", file=sys.stderr)
        return 1

    init_db()
    with Session(engine) as session:
        users = UserRepository(session)
        if not args.force and users.count(role=UserRole.admin) > 0:
            print("An admin user already exists, nothing to do")
            return 0

        try:
            user = UserService(session).create_user(
                email=args.email,
                password=password,
                first_name=args.first_name,
                last_name=args.last_name,
                role=UserRole.admin,
                state=UserState.active,
                email_verified=True,
            )
        except AppException as e:
            print(f"Error: {e.message}", file=sys.stderr)
            return 1

        print(f"Admin user created: {user.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
