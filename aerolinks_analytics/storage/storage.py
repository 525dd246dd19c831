"""
Storage module for Aerolinks Analytics (JSONL file and in-memory logs).

Responsibilities:
    - Append stamped events to the log, one JSON object per line
    - Lazily create the data directory and an empty log on first use
    - Read the whole log back in append order, skipping corrupt lines

Design:
    - FileStorage is the default, durable backend. Each append is a single
      `os.write` on a descriptor opened with O_APPEND, so records from
      concurrent writers are never interleaved mid-line.
    - MemoryStorage keeps encoded lines in a list. It goes through the same
      codec, which keeps unit/integration tests fast and faithful.

LLM Prompt Example:
    "Explain how this file-backed log can be swapped for a database-backed
     layer without changing the API or aggregator, by adhering to a narrow,
     explicit BaseStorage interface."
"""

import os
from typing import List

from ..events.schemas import StoredEvent
from .base import BaseStorage
from .records import decode_records, encode_record


class FileStorage(BaseStorage):
    def __init__(self, path: str):
        """
        Args:
            path (str): Location of the JSONL log. Parent directories and the
                file itself are created on first use, not here.
        """
        self.path = path

    def _ensure_storage(self) -> None:
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        if not os.path.exists(self.path):
            # "a" never truncates if another writer created it meanwhile
            with open(self.path, "a", encoding="utf-8"):
                pass

    def _append(self, stored: StoredEvent) -> None:
        self._ensure_storage()
        data = (encode_record(stored) + "\n").encode("utf-8")
        fd = os.open(self.path, os.O_WRONLY | os.O_APPEND | os.O_CREAT, 0o644)
        try:
            written = os.write(fd, data)
        finally:
            os.close(fd)
        if written != len(data):
            raise OSError(f"Short write to event log ({written}/{len(data)} bytes)")

    def read_events(self) -> List[StoredEvent]:
        """
        Read and decode every record in the log.

        Returns:
            List[StoredEvent]: Valid records in append order; [] for an empty log.

        Raises:
            OSError: If the log exists but cannot be read.
        """
        self._ensure_storage()
        with open(self.path, "r", encoding="utf-8", errors="replace") as f:
            return decode_records(f)


class MemoryStorage(BaseStorage):
    def __init__(self):
        """
        Initialize an empty in-process log.

        Internal schema:
            self.lines = ['{"type":"page_view","visitorId":"v1","ts":...}', ...]
        """
        self.lines: List[str] = []

    def _append(self, stored: StoredEvent) -> None:
        self.lines.append(encode_record(stored))

    def read_events(self) -> List[StoredEvent]:
        return decode_records(list(self.lines))
