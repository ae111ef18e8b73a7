"""Helper utilities shared across API route handlers."""

from fastapi import HTTPException, status

from alnet.domain.errors import Conflict, DomainError, InvalidOperation, NotFound, Unauthorized

_STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Conflict, status.HTTP_409_CONFLICT),
    (Unauthorized, status.HTTP_401_UNAUTHORIZED),
    (InvalidOperation, status.HTTP_400_BAD_REQUEST),
)


def to_http_exception(exc: DomainError) -> HTTPException:
    """Translate a domain error into the matching HTTP error response."""

    for error_type, status_code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return HTTPException(status_code=status_code, detail=str(exc))
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
