"""
Infrastructure exceptions for the timeline gateway.

This module defines infrastructure-level exceptions related to the
upstream social-network API and the document signer.
"""

from src.domain.exceptions import GatewayException


# Upstream Exceptions
class UpstreamException(GatewayException):
    """Upstream request failed."""

    def __init__(self, url: str, reason: str, status_code: int | None = None):
        details: dict = {"url": url, "reason": reason}
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(
            f"Upstream request failed: {url} ({reason})",
            "UPSTREAM_ERROR",
            details,
        )
        self.status_code = status_code


class UpstreamNotFoundError(UpstreamException):
    """Upstream resource does not exist."""

    def __init__(self, url: str):
        super().__init__(url, "not found", status_code=404)
        self.error_code = "UPSTREAM_NOT_FOUND"


class UpstreamResponseError(UpstreamException):
    """Upstream answered with a body the gateway cannot interpret."""

    def __init__(self, url: str, reason: str):
        super().__init__(url, reason)
        self.error_code = "UPSTREAM_BAD_RESPONSE"


# Signer Exceptions
class InvalidSubkeyError(GatewayException):
    """Subkey credential is malformed."""

    def __init__(self, reason: str):
        super().__init__(f"Invalid subkey: {reason}", "INVALID_SUBKEY", {"reason": reason})
