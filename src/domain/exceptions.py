"""
Domain exceptions for the timeline gateway.

This module defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns.
"""

from typing import Any


class GatewayException(Exception):
    """
    Base exception for all gateway errors.

    All custom exceptions should inherit from this class to allow
    for consistent error handling and logging.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for API responses
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class TimelineNotFoundException(GatewayException):
    """Raised when the requested timeline does not exist upstream."""

    def __init__(self, timeline_id: str):
        super().__init__(
            f"Timeline not found: {timeline_id}",
            "TIMELINE_NOT_FOUND",
            {"timeline_id": timeline_id},
        )


class CrossOriginPostException(GatewayException):
    """Raised when posting to a timeline hosted outside the gateway's home host."""

    def __init__(self, timeline_id: str, timeline_host: str, home_host: str):
        super().__init__(
            f"Posting to {timeline_id} is not allowed from {home_host}",
            "CROSS_ORIGIN_POST",
            {
                "timeline_id": timeline_id,
                "timeline_host": timeline_host,
                "home_host": home_host,
            },
        )


class InvalidAssetReferenceException(GatewayException):
    """Raised when a client asset reference cannot be turned into a URL."""

    def __init__(self, reference: str):
        super().__init__(
            f"Invalid asset reference: {reference!r}",
            "INVALID_ASSET_REFERENCE",
            {"reference": reference},
        )


class MessageNotFoundException(GatewayException):
    """Raised when a referenced message cannot be resolved."""

    def __init__(self, message_id: str, author: str | None = None):
        details: dict[str, Any] = {"message_id": message_id}
        if author:
            details["author"] = author
        super().__init__(f"Message not found: {message_id}", "MESSAGE_NOT_FOUND", details)


class ServiceUnavailableException(GatewayException):
    """Raised when a request arrives before the upstream client is ready."""

    def __init__(self, message: str = "Upstream client is not initialized"):
        super().__init__(message, "SERVICE_UNAVAILABLE")
