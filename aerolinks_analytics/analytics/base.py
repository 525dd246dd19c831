"""
Abstract Base Class for Analytics Backends.

Responsibilities:
    - Define required methods for any analytics implementation
    - Support easy substitution (e.g., log rescan today, rollup tables later)

LLM Prompt Example:
    "Create an abstract base class for analytics that defines record and summary
    methods, and explain how to mark abstract methods to be excluded from coverage."
"""

from abc import ABC, abstractmethod

from ..events.schemas import Event, StoredEvent
from .models import StatsSummary

__all__ = ["BaseAnalytics"]


class BaseAnalytics(ABC):
    """Abstract base for pluggable analytics backends."""

    @abstractmethod
    def record(self, event: Event) -> StoredEvent:  # pragma: no cover
        """
        Record one validated event.

        Args:
            event (Event): A page view or banner click.

        Returns:
            StoredEvent: The event as persisted, with its timestamp.
        """
        raise NotImplementedError

    @abstractmethod
    def summary(self) -> StatsSummary:  # pragma: no cover
        """
        Provide the dashboard summary.

        Returns:
            StatsSummary: Aggregated statistics over every recorded event.
        """
        raise NotImplementedError
