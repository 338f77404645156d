"""Custom exception types for domain and API layers."""

ERR_BAD_REQUEST = "BAD_REQUEST"
ERR_NOT_FOUND = "NOT_FOUND"
ERR_INTERNAL = "INTERNAL"


class AppError(Exception):
    """Base app exception.

    Carries the error code string and HTTP status the API layer responds with.
    """

    code: str = ERR_INTERNAL
    status_code: int = 500
    message: str = "internal error"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class NotFoundError(AppError):
    """Requested subscription does not exist."""

    code = ERR_NOT_FOUND
    status_code = 404
    message = "resource not found"


class IncorrectTimeRangeError(AppError):
    """End month precedes start month."""

    code = ERR_BAD_REQUEST
    status_code = 400
    message = "the end date must be later than the start date"


class InternalError(AppError):
    """Unexpected failure; details are logged, never returned to the caller."""
