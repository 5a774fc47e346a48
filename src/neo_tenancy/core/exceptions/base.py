"""Root of the neo-tenancy exception hierarchy."""

from typing import Any, Dict, Optional


class NeoTenancyError(Exception):
    """Base exception for all neo-tenancy errors.

    ``error_code`` defaults to the class name; ``details`` holds structured
    context (domain, cache keys) for log records and error payloads.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code or type(self).__name__
        self.details = dict(details) if details else {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.error_code,
            "message": self.message,
            "details": self.details,
            "type": type(self).__name__,
        }


def create_error_response(exception: NeoTenancyError) -> Dict[str, Any]:
    """Wrap an exception in an ``{"error": ...}`` payload."""
    return {"error": exception.to_dict()}
