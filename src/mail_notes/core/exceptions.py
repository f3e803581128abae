"""
Custom Exceptions

Application-specific exception classes. Each carries the message returned to
the client in the ``{"error": ...}`` response body.
"""


class ApplicationError(Exception):
    """Base exception for all application errors."""

    status_code = 500

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class InvalidInputError(ApplicationError):
    """Raised when a required request field is missing or malformed."""

    status_code = 400


class StoreError(ApplicationError):
    """
    Raised when the note store fails (unreachable, query error, constraint).

    The client always gets the generic message; the underlying exception is
    chained as ``__cause__`` and logged server-side only.
    """

    status_code = 500

    def __init__(self, message: str = "Internal server error") -> None:
        super().__init__(message)
