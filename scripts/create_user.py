"""Utility script to register a user and print a bearer token for it."""

from __future__ import annotations

import argparse
from datetime import timedelta

from sqlalchemy.exc import SQLAlchemyError

from alnet.application.use_cases.users import create_user
from alnet.domain.entities import USER_ROLES, USER_ROLE_STUDENT
from alnet.domain.errors import DomainError
from alnet.infrastructure.database import SessionLocal, initialize_database
from alnet.infrastructure.security import create_access_token


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user for the AlNet realtime API and print an access token.",
    )
    parser.add_argument("--name", required=True, help="Full name of the user")
    parser.add_argument("--email", required=True, help="Email address of the user")
    parser.add_argument(
        "--role",
        default=USER_ROLE_STUDENT,
        choices=USER_ROLES,
        help=f"Role of the user (default: {USER_ROLE_STUDENT})",
    )
    parser.add_argument(
        "--token-minutes",
        type=int,
        default=60 * 24,
        help="Lifetime in minutes of the printed access token (default: one day)",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(session, name=args.name, email=args.email, role=args.role)
    except DomainError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error while saving the user: {exc}") from exc
    else:
        token = create_access_token(
            {"sub": str(user.id)}, expires_delta=timedelta(minutes=args.token_minutes)
        )
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Name: {user.name}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role}\n"
            f"  Token: {token}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
