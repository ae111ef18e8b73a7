"""Bearer token helpers.

Token issuance belongs to the authentication service; this module only needs
to verify the tokens it hands out. ``create_access_token`` exists for seeding
scripts and tests.
"""

from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from alnet.config import get_settings


def create_access_token(data: dict, expires_delta: timedelta | None = None) -> str:
    settings = get_settings()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode(
        {**data, "exp": expire}, settings.secret_key, algorithm=settings.jwt_algorithm
    )


def decode_access_token(token: str) -> dict:
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc


def extract_user_id(token: str) -> int:
    """Return the user id carried in the ``sub`` claim of ``token``."""

    payload = decode_access_token(token)
    subject = payload.get("sub")
    try:
        return int(subject)
    except (TypeError, ValueError) as exc:
        raise ValueError("Could not validate credentials") from exc
