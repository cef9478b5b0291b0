"""Exception classes for the remote event-log source.

This module defines a hierarchy of exception classes for the
conditions that can occur when fetching the placeholder user listing
that backs the event log.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class LogAPIError(Exception):
    """Error during an event-log request or response parsing.

    Includes the HTTP status (0 when no response was received) and the
    raw response body when available.
    """

    def __init__(
        self, code: int, message: str, response: Optional[Dict[str, Any]] = None
    ) -> None:
        """Initialize the exception.

        Args:
            code: HTTP status code or 0 for transport/parse failures
            message: Human-readable error message
            response: Optional raw API response for debugging
        """
        super().__init__(f"[{code}] {message}")
        self.code: int = code
        self.message: str = message
        self.response: Optional[Dict[str, Any]] = response

    @property
    def is_client_error(self) -> bool:
        """Check if this is a client-side error (4xx)."""
        return 400 <= self.code < 500

    @property
    def is_server_error(self) -> bool:
        """Check if this is a server-side error (5xx)."""
        return self.code >= 500

    @classmethod
    def from_response(cls, response: Dict[str, Any], status_code: int = 0) -> LogAPIError:
        """Create an error from an API response.

        Args:
            response: Decoded response body (may be empty)
            status_code: HTTP status code

        Returns:
            Appropriate LogAPIError subclass
        """
        if 400 <= status_code < 500:
            if status_code == 404:
                return NotFoundError(status_code, response.get("message", "Resource not found"))
            if status_code == 429:
                return RateLimitError(
                    status_code, response.get("message", "Rate limit exceeded")
                )
            return ClientError(status_code, response.get("message", "Client error"), response)
        if status_code >= 500:
            return ServerError(status_code, response.get("message", "Server error"), response)

        return cls(status_code, response.get("message", "Unknown error"), response)


class NetworkError(LogAPIError):
    """Raised when a network issue prevents API communication."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(0, message)
        self.original_error = original_error


class NotFoundError(LogAPIError):
    """Raised when the endpoint does not exist."""


class RateLimitError(LogAPIError):
    """Raised when rate limits are exceeded."""


class ClientError(LogAPIError):
    """Raised for general 4xx client errors."""


class ServerError(LogAPIError):
    """Raised for 5xx server errors."""


class ParseError(LogAPIError):
    """Raised when the response body is not the expected user listing."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(0, message)
        self.original_error = original_error
