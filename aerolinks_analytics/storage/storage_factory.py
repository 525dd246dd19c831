"""
Storage factory: switch event log backend from config (lazy env version)
=========================================================================

This module centralizes selection of the storage backend (file, memory or
DB) so the rest of the app can stay ignorant of where events live.

- Reads environment **at call time** to avoid stale values in tests.
- Imports the DB backend **only if** the selected backend is "postgres".

Environment variables
---------------------
- AEROLINKS_STORAGE_BACKEND: "file" (default), "memory" or "postgres"
- AEROLINKS_DATA_DIR / AEROLINKS_EVENTS_FILE: log location for "file"
- AEROLINKS_DB_DSN: DSN string if backend=="postgres"

LLM Prompt
----------
You are extending storage backends. Keep defaults safe ("file"). Read env lazily
inside the factory function. Don't import heavy DB modules unless needed.
"""

import os
from typing import Optional

from aerolinks_analytics.config import settings
from aerolinks_analytics.storage.base import BaseStorage
from aerolinks_analytics.storage.storage import FileStorage, MemoryStorage


def get_storage(backend: Optional[str] = None, **kwargs) -> BaseStorage:
    """
    Return a BaseStorage object based on configuration.

    Parameters
    ----------
    backend : str, optional
        "file", "memory" or "postgres". If omitted, reads AEROLINKS_STORAGE_BACKEND.
    kwargs : dict
        Extra args for the backend: path="..." for file, dsn="..." for postgres.

    Returns
    -------
    BaseStorage-compatible instance
    """
    be = (backend or os.getenv("AEROLINKS_STORAGE_BACKEND", settings.STORAGE_BACKEND)).strip().lower()

    if be == "file":
        path = kwargs.get("path") or os.path.join(
            os.getenv("AEROLINKS_DATA_DIR", settings.DATA_DIR),
            os.getenv("AEROLINKS_EVENTS_FILE", settings.EVENTS_FILE),
        )
        return FileStorage(path)

    if be == "memory":
        return MemoryStorage()

    if be == "postgres":
        dsn = kwargs.get("dsn") or os.getenv("AEROLINKS_DB_DSN", settings.DB_DSN)
        if not dsn:
            raise ValueError("DB_DSN is required for postgres backend (env AEROLINKS_DB_DSN)")
        # Local import to avoid hard dependency when not using postgres
        from aerolinks_analytics.storage.db_storage import DBStorage
        return DBStorage(dsn=dsn)

    raise ValueError(f"Unknown storage backend: {be!r}")
