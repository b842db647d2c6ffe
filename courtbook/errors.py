"""Custom exception classes for the application."""


class AppError(Exception):
    """Base application error class.

    ``kind`` is the stable machine-readable error code returned to clients,
    ``message`` the human-readable explanation.
    """

    status_code = 400
    default_kind = "AppError"

    def __init__(self, message, kind=None, status_code=None):
        """Initialize the error."""
        super().__init__(message)
        self.message = message
        self.kind = kind or self.default_kind
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self):
        """Serialize the error for a JSON response body."""
        return {"success": False, "error": self.kind, "message": self.message}


class InvalidIdentifierError(AppError):
    """Raised when a path identifier is not a well-formed document id."""

    status_code = 400
    default_kind = "InvalidIdentifier"


class InvalidFormatError(AppError):
    """Raised when a date or time does not match its expected pattern."""

    status_code = 400
    default_kind = "InvalidFormat"


class UnauthorizedError(AppError):
    """Raised when the request carries no authenticated user."""

    status_code = 401
    default_kind = "NotAuthenticated"


class NotFoundError(AppError):
    """Raised when a resource is not found."""

    status_code = 404
    default_kind = "NotFound"

    def __init__(self, message="Resource not found.", kind=None):
        """Initialize the error."""
        super().__init__(message, kind)


class ForbiddenError(AppError):
    """Raised when the caller's role or verification forbids the action."""

    status_code = 403
    default_kind = "Forbidden"


class UnavailableError(AppError):
    """Raised when a court cannot be booked on the requested date."""

    status_code = 409
    default_kind = "Unavailable"


class InvalidRequestError(AppError):
    """Raised when a well-formed request breaks a booking rule."""

    status_code = 400
    default_kind = "InvalidRequest"


class ConflictError(AppError):
    """Raised when trying to claim a slot that is already taken."""

    status_code = 409
    default_kind = "Conflict"
