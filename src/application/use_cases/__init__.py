"""Application use cases."""

from src.application.use_cases.timelines import (EntryEnricher, PostService,
                                                 PostSubmission,
                                                 TimelineAggregationService,
                                                 TimelineResolver)

__all__ = [
    "EntryEnricher",
    "PostService",
    "PostSubmission",
    "TimelineAggregationService",
    "TimelineResolver",
]
