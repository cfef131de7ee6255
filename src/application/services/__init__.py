"""Application services."""

from src.application.services.identity_resolution import (ANONYMOUS_NAME,
                                                           DisplayIdentity,
                                                           first_non_empty,
                                                           resolve_identity)
from src.application.services.image_proxy import ImageProxy

__all__ = [
    "ANONYMOUS_NAME",
    "DisplayIdentity",
    "ImageProxy",
    "first_non_empty",
    "resolve_identity",
]
