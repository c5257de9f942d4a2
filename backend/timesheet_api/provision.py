"""Create a user directly in the database, outside the HTTP API.

Usage:

    timesheet-create-user --password 's3cret'
    timesheet-create-user --username jdoe --email jdoe@example.com --password pw \
        --first-name Jane --last-name Doe
"""
from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Sequence

from sqlalchemy.exc import SQLAlchemyError

from .config import Settings, get_settings
from .database import Database
from .errors import ConstraintViolation
from .logging import setup_logging
from .models import User
from .security import hash_password
from .store import UserStore

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a timesheet user account")
    parser.add_argument("--username", default="admin")
    parser.add_argument("--email", default="admin@timesheet.com")
    parser.add_argument("--password", required=True)
    parser.add_argument("--first-name", default="Admin")
    parser.add_argument("--last-name", default="User")
    return parser


async def create_user(
    database: Database,
    username: str,
    email: str,
    password: str,
    first_name: str | None = None,
    last_name: str | None = None,
) -> User:
    """Ensure the schema exists and insert one user with a hashed password."""

    await database.create_all()
    async with database.session() as session:
        return await UserStore(session).insert(
            username=username,
            email=email,
            password_hash=hash_password(password),
            first_name=first_name,
            last_name=last_name,
        )


async def _run(args: argparse.Namespace, settings: Settings) -> int:
    database = Database.from_settings(settings)
    try:
        user = await create_user(
            database,
            username=args.username,
            email=args.email,
            password=args.password,
            first_name=args.first_name,
            last_name=args.last_name,
        )
    except ConstraintViolation:
        logger.error("User %r or email %r already exists", args.username, args.email)
        return 1
    except SQLAlchemyError:
        logger.exception("Error creating user")
        return 1
    except ValueError:
        logger.error("Password for %r was rejected by the hashing backend", args.username)
        return 1
    finally:
        await database.dispose()

    print(f"User created successfully: id={user.id} username={user.username} email={user.email}")
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    settings = get_settings()
    setup_logging(settings.log_level)
    return asyncio.run(_run(args, settings))


if __name__ == "__main__":
    sys.exit(main())
