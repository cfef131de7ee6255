"""Domain value objects."""

from src.domain.value_objects.core import TimelineRef

__all__ = [
    "TimelineRef",
]
