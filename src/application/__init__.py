"""
Application layer - Application Business Rules.

This layer contains application-specific business rules, including:
- Interfaces (ports) for the upstream client and preview service
- Use cases that aggregate timelines and submit posts
- Application services (identity resolution, image proxy)
"""

from src.application.interfaces import (IImageProxy, ILinkPreviewService,
                                        ITimelineClient)
from src.application.services import ImageProxy, resolve_identity
from src.application.use_cases import (EntryEnricher, PostService,
                                       PostSubmission,
                                       TimelineAggregationService,
                                       TimelineResolver)

__all__ = [
    # Interfaces
    "ITimelineClient",
    "ILinkPreviewService",
    "IImageProxy",
    # Services
    "ImageProxy",
    "resolve_identity",
    # Use cases
    "EntryEnricher",
    "PostService",
    "PostSubmission",
    "TimelineAggregationService",
    "TimelineResolver",
]
