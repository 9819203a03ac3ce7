from typing import Any


class APIError(Exception):
    """Base exception for all API errors."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for JSON response."""
        return {"detail": str(self)}


class ValidationError(APIError):
    """Raised for semantically invalid request parameters - maps to HTTP 422."""

    status_code = 422


class GooglePayloadError(ValidationError):
    """Raised when a Google Docs or Drive payload does not have the expected shape - maps to HTTP 422."""

    def __init__(self, source: str, errors: list[dict[str, Any]], *, message: str | None = None):
        super().__init__(message or f"Malformed {source} payload ({len(errors)} errors)")
        self.source = source
        self.errors = errors

    def to_dict(self) -> dict[str, Any]:
        return {"detail": str(self), "source": self.source, "errors": self.errors}


class InvalidDocumentIdError(ValidationError):
    """Raised when a Google Docs URL or id cannot be parsed - maps to HTTP 422."""

    def __init__(self, value: str, *, message: str | None = None):
        super().__init__(message or f"Not a Google Docs URL or document id: {value!r}")
        self.value = value
