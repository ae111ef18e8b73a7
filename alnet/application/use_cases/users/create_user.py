"""Use case for registering the users that take part in messaging."""

from sqlalchemy.orm import Session

from alnet.domain.entities import USER_ROLES, USER_ROLE_STUDENT, User
from alnet.domain.errors import Conflict, InvalidOperation
from alnet.infrastructure.repositories import UserRepository
from alnet.utils import now_in_app_timezone


def create_user(
    session: Session,
    *,
    name: str,
    email: str,
    role: str = USER_ROLE_STUDENT,
) -> User:
    """Create a new user ensuring unique email addresses."""

    name = (name or "").strip()
    email = (email or "").strip().lower()
    if not name or "@" not in email:
        raise InvalidOperation("A name and a valid email are required")
    if role not in USER_ROLES:
        raise InvalidOperation(f"Unknown role '{role}'")

    repository = UserRepository(session)
    if repository.get_by_email(email):
        raise Conflict("Email is already registered")

    return repository.create(
        User(id=None, name=name, email=email, role=role, created_at=now_in_app_timezone())
    )
