#!/usr/bin/env python3
"""CLI management tool for user accounts.

Provides commands to:
- Add users with bcrypt-hashed passwords (same rules as /auth/signup)
- List all users
"""

import argparse
import getpass
import sys
from pathlib import Path

from .auth.passwords import DEFAULT_ROUNDS, PasswordHasher
from .auth.service import MIN_PASSWORD_LENGTH
from .auth.store import CredentialStore
from .config import DEFAULT_DATA_DIR, USERS_FILE
from .errors import NotekeepError, ValidationError
from .storage import JsonFileStorage


def add_user(args, store: CredentialStore, hasher: PasswordHasher) -> int:
    """Add a new user with optional password prompt."""
    email = args.email

    # Prompt for password if not provided
    if args.password:
        password = args.password
    else:
        password = getpass.getpass(f"Password for {email}: ")
        if not password:
            print("Error: Password cannot be empty", file=sys.stderr)
            return 1
        if getpass.getpass("Confirm password: ") != password:
            print("Error: Passwords do not match", file=sys.stderr)
            return 1

    try:
        if len(password) < MIN_PASSWORD_LENGTH:
            raise ValidationError(
                f"Password must be at least {MIN_PASSWORD_LENGTH} characters long."
            )
        user = store.create(email, hasher.hash(password))
    except NotekeepError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    print(f"✓ User created: {user.id} ({email})")
    return 0


def list_users(args, store: CredentialStore) -> int:
    """List all users with their signup time."""
    try:
        users = store.list_users()
    except NotekeepError as e:
        print(f"Error: {e.message}", file=sys.stderr)
        return 1

    if not users:
        print("No users found")
        return 0

    print(f"{'ID':<38} {'Email':<30} {'Created':<25}")
    print("-" * 93)

    for user in users:
        created = user.created_at.strftime("%Y-%m-%d %H:%M:%S")
        print(f"{user.id:<38} {user.email:<30} {created:<25}")

    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="notekeep-manage",
        description="Manage notekeep user accounts",
    )
    parser.add_argument(
        "--data-dir",
        default=DEFAULT_DATA_DIR,
        help=f"Directory holding {USERS_FILE} (default: {DEFAULT_DATA_DIR})",
    )
    parser.add_argument(
        "--bcrypt-rounds",
        type=int,
        default=DEFAULT_ROUNDS,
        help=f"bcrypt work factor for new passwords (default: {DEFAULT_ROUNDS})",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    add_parser = subparsers.add_parser("add-user", help="Add a new user")
    add_parser.add_argument("--email", required=True, help="Email address")
    add_parser.add_argument("--password", help="Password (prompted if omitted)")

    subparsers.add_parser("list-users", help="List all users")

    return parser


def main(argv=None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    store = CredentialStore(JsonFileStorage(Path(args.data_dir) / USERS_FILE))

    if args.command == "add-user":
        return add_user(args, store, PasswordHasher(args.bcrypt_rounds))
    elif args.command == "list-users":
        return list_users(args, store)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
