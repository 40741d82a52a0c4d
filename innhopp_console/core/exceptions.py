"""Exception types raised by the I/O-facing layers of the innhopp console."""

from __future__ import annotations


class ProcessingError(RuntimeError):
    """Raised when loading event data or writing an export fails."""

    def __init__(self, message: str, *, details: dict | None = None):
        super().__init__(message)
        self.details = details or {}

    def as_dict(self) -> dict:
        """Return a serializable representation."""
        payload = {"message": str(self)}
        if self.details:
            payload["details"] = self.details
        return payload


class InvalidPayloadError(ProcessingError):
    """Raised when a request body is missing a field or has the wrong shape."""

    def __init__(self, field: str, message: str | None = None):
        super().__init__(message or f"'{field}' is required", details={"field": field})
        self.field = field
