"""Exceptions raised by the session services and stores."""


class AppError(Exception):
    """Base error for anything the session layer refuses to do."""

    def __init__(self, message, status_code=400):
        """Initialize the error."""
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ValidationError(AppError):
    """Raised when an edit carries a bad number, name or date."""

    def __init__(self, message="Invalid value."):
        """Initialize the error."""
        super().__init__(message, 400)


class RoleError(ValidationError):
    """Raised when an edit does not apply to the participant's role.

    Master participants never owe a fee, so fee edits on them are refused.
    """

    def __init__(self, message="Not allowed for this participant."):
        """Initialize the error."""
        super().__init__(message)


class DuplicateResourceError(AppError):
    """Raised when a master player is added twice to one session."""

    def __init__(self, message="Player is already in this session."):
        """Initialize the error."""
        super().__init__(message, 409)


class NotFoundError(AppError):
    """Raised when a player, session or participant record is missing."""

    def __init__(self, message="Record not found."):
        """Initialize the error."""
        super().__init__(message, 404)
