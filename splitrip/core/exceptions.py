"""
Domain error taxonomy.

Every failure the services can report maps to one of these classes. The HTTP
layer renders them as ``{"error": kind, "message": message}`` with the class's
status code.
"""


class SplitripError(Exception):
    """Base class for all domain errors."""

    kind = "error"
    status_code = 500

    def __init__(self, message: str = None):
        self.message = message or self.__class__.__doc__.strip()
        super().__init__(self.message)

    def to_dict(self) -> dict:
        return {"error": self.kind, "message": self.message}


class ValidationError(SplitripError):
    """Invalid input."""

    kind = "validation_error"
    status_code = 400


class Unauthorized(SplitripError):
    """Authentication required."""

    kind = "unauthorized"
    status_code = 401


class NotFoundError(SplitripError):
    """Resource not found."""

    kind = "not_found"
    status_code = 404


class DuplicateError(SplitripError):
    """Resource already exists."""

    kind = "duplicate"
    status_code = 409


class StorageError(SplitripError):
    """Storage operation failed."""

    kind = "storage_error"
    status_code = 500


class ConversionUnavailable(SplitripError):
    """Exchange rate unavailable."""

    kind = "conversion_unavailable"
    status_code = 503
