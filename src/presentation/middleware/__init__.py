"""
Middleware layer for the timeline gateway.

This package contains middleware components for request processing,
request IDs, body size limits, and per-client rate limiting.
"""
