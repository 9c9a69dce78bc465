"""
Errors raised by the user service.
"""


class UserServiceError(Exception):
    """Base class for user service errors."""


class ValidationError(UserServiceError):
    """A user record violates a field rule."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class NotFoundError(UserServiceError):
    """No matching (non-deleted) user exists."""


class HashingFailed(UserServiceError):
    """The password could not be hashed."""

    def __init__(self, cause: Exception):
        super().__init__(f"Password failed to hash: {cause}")
        self.cause = cause


class StoreError(UserServiceError):
    """The underlying store failed while running an operation."""

    def __init__(self, operation: str, cause: Exception):
        # The driver message only; the SQLAlchemy wrapper also carries the
        # statement and its bound parameters
        super().__init__(f"{operation} failed: {getattr(cause, 'orig', None) or cause}")
        self.operation = operation
        self.cause = cause
