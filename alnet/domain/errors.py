"""Error taxonomy shared by every use case.

All errors derive from :class:`ValueError` so callers that only care about
"the request was not acceptable" can keep catching ``ValueError``.
"""


class DomainError(ValueError):
    """Base class for expected, user facing failures."""


class InvalidOperation(DomainError):
    """The requested action is not allowed for these parties or this state."""


class Conflict(DomainError):
    """The action would create a duplicate of an existing record."""


class NotFound(DomainError):
    """The entity does not exist or is not visible to the caller."""


class Unauthorized(DomainError):
    """Missing or invalid credentials."""


__all__ = ["DomainError", "InvalidOperation", "Conflict", "NotFound", "Unauthorized"]
