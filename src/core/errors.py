class IntelError(Exception):
    """Base error for the company intelligence service."""


class ConfigurationError(IntelError):
    """Missing or invalid startup configuration."""


class NotFoundError(IntelError):
    """Requested entity does not exist."""


class ValidationError(IntelError):
    """Input rejected before or by the persistence layer."""


class DuplicateEntryError(ValidationError):
    """Uniqueness constraint violated (e.g. company already in a watchlist)."""


class AuthenticationError(IntelError):
    """Missing, invalid or expired credentials."""


class PermissionDeniedError(IntelError):
    """Authenticated user lacks the role required for the action."""


class StorageError(IntelError):
    """Object storage write or path failure."""
