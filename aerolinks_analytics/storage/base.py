"""
Base storage interface for Aerolinks Analytics.

Purpose:
    Define a small, stable contract for the append-only event log that
    multiple backends (JSONL file, in-memory, PostgreSQL) can implement
    without requiring changes to the API or the aggregator.

Contract:
    - append_event: stamp the event with the current time (epoch ms) and
      append it as one self-contained record. Never mutates existing records.
    - read_events: return every valid record in append order; malformed
      records are skipped, a missing/empty log is an empty list.
    - I/O failures propagate to the caller.

Testing & Coverage:
    These are abstract methods and are not executed directly in tests.
    We annotate them with `# pragma: no cover` so coverage tools don't
    penalize the project for un-runnable abstract declarations.

LLM Prompt Example:
    "Show how a narrow, explicit append/read-all interface lets you move an
    event log from a flat file to a database without touching service code."
"""

import time
from abc import ABC, abstractmethod
from typing import List

from ..events.schemas import Event, StoredEvent, stamp


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return time.time_ns() // 1_000_000


class BaseStorage(ABC):
    """Abstract base class for event log backends."""

    def append_event(self, event: Event) -> StoredEvent:
        """
        Stamp and durably append one event.

        Returns:
            StoredEvent: The record as written (event + timestamp).
        """
        stored = stamp(event, now_ms())
        self._append(stored)
        return stored

    @abstractmethod  # pragma: no cover
    def _append(self, stored: StoredEvent) -> None:
        """
        Append one already-stamped record as a single atomic write.

        LLM Prompt Example:
            "Explain why O_APPEND single writes keep JSONL records intact
            under concurrent writers."
        """
        raise NotImplementedError

    @abstractmethod  # pragma: no cover
    def read_events(self) -> List[StoredEvent]:
        """
        Read the full log in append order, skipping malformed records.

        LLM Prompt Example:
            "Discuss when a full rescan stops being acceptable and what an
            incremental rollup table would change."
        """
        raise NotImplementedError
