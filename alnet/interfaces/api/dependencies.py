"""FastAPI dependency utilities."""

from fastapi import Depends, HTTPException, WebSocket, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from alnet.domain.entities import User
from alnet.domain.errors import Unauthorized
from alnet.infrastructure.database import get_db
from alnet.infrastructure.repositories import UserRepository
from alnet.infrastructure.security import extract_user_id

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token")


def resolve_user_from_token(token: str | None, db: Session) -> User:
    """Return the active user named by ``token`` or raise :class:`Unauthorized`."""

    if not token:
        raise Unauthorized("Missing credentials")
    try:
        user_id = extract_user_id(token)
    except ValueError as exc:
        raise Unauthorized("Invalid credentials") from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise Unauthorized("User not found")
    if not user.is_active:
        raise Unauthorized("Inactive user")
    return user


def get_current_user(
    token: str = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
) -> User:
    """Return the authenticated user from the provided token."""

    try:
        return resolve_user_from_token(token, db)
    except Unauthorized as exc:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(exc),
            headers={"WWW-Authenticate": "Bearer"},
        ) from exc


def websocket_token(websocket: WebSocket) -> str | None:
    """Read the bearer token from the ``token`` query parameter or the header."""

    token = websocket.query_params.get("token")
    if token:
        return token
    authorization = websocket.headers.get("authorization") or ""
    scheme, _, credentials = authorization.partition(" ")
    if scheme.lower() == "bearer" and credentials.strip():
        return credentials.strip()
    return None
