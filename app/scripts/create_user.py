"""
Create a user (e.g. first admin) directly in local storage. Run from project root:
  python -m app.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m app.scripts.create_user "Admin" admin@example.com your-secure-password admin
"""
import argparse
import asyncio
import logging
import sys

from dotenv import load_dotenv

from app.core.config import get_settings
from app.core.security import NAME_MAX_LEN, PASSWORD_MAX_LEN, PASSWORD_MIN_LEN
from app.core.storage import build_storage
from app.services.booking_store import BookingStore
from app.services.errors import DuplicateEmailError
from app.services.seed import build_seed_source

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)


def main(argv: list[str] | None = None) -> int:
    load_dotenv()
    parser = argparse.ArgumentParser(description="Create a booking user (bypasses registration).")
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("email", help="Account email")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args(argv)

    name = args.name.strip()
    if not name or len(name) > NAME_MAX_LEN:
        print("Invalid name length.", file=sys.stderr)
        return 1
    if "@" not in args.email:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    settings = get_settings()
    store = BookingStore(
        storage=build_storage(settings),
        seed_source=build_seed_source(settings),
        delay_seconds=0,
        key_prefix=settings.STORAGE_KEY_PREFIX,
        strict_writes=True,
    )
    try:
        user = asyncio.run(store.create_user(name, args.email, args.password, role=args.role))
    except DuplicateEmailError:
        print(f"User '{args.email}' already exists.", file=sys.stderr)
        return 1
    print(f"Created user '{user.email}' (id {user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
