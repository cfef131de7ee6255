"""
Service interfaces (ports) for the application layer.

These protocols define the contracts for application services.
Following Dependency Inversion Principle (DIP).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from src.domain.entities import LinkPreview


class ILinkPreviewService(Protocol):
    """Protocol for link preview (summary) services (DIP)"""

    async def preview(self, url: str) -> LinkPreview | None:
        """Resolve a preview for url; never raises, None when unavailable"""
        ...


class IImageProxy(Protocol):
    """Protocol for image URL rewriting"""

    def rewrite(self, url: str | None) -> str:
        """Route an image URL through the proxy"""
        ...
