from src.application.use_cases.timelines.aggregate_timeline import (
    EntryEnricher, ResolvedTimeline, TimelineAggregationService,
    TimelineResolver)
from src.application.use_cases.timelines.submit_post import (PostService,
                                                             PostSubmission)

__all__ = [
    "EntryEnricher",
    "PostService",
    "PostSubmission",
    "ResolvedTimeline",
    "TimelineAggregationService",
    "TimelineResolver",
]
