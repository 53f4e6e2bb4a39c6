"""
Create a staff user (e.g. the first administrator). Run from project root:
  python -m app.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user admin your-secure-password "Quản trị"
"""
import argparse
import logging
import sys

from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    ROLE_OPERATOR,
    ROLES,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
)
from app.core.store import StoreError, get_store
from app.services.users import DuplicateUsernameError, create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a tournament staff user.")
    parser.add_argument("username", help=f"Username ({USERNAME_MIN_LEN}-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default=ROLE_OPERATOR, choices=ROLES)
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    try:
        create_user(get_store(), username, args.password, args.role)
    except DuplicateUsernameError:
        print(f"User '{username}' already exists.", file=sys.stderr)
        return 1
    except StoreError as e:
        logger.error("Could not create user: %s", e.message)
        return 1
    print(f"Created user '{username}' with role '{args.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
