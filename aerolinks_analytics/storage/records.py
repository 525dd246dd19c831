"""
JSONL record codec shared by every storage backend.

One stored event is one compact JSON object on one line. Decoding is lenient
per line: a line that is not JSON, or is JSON but not a valid event record,
is skipped so one corrupt record can never black out the whole read.

A record only needs `type`, `visitorId` (and `bannerId` for clicks) to count.
Records missing `ts`, or with a fractional `ts`, written by other producers
are still kept.
"""

import json
import logging
from typing import Iterable, List

from pydantic import ValidationError

from ..events.schemas import StoredEvent, parse_stored_event

log = logging.getLogger("aerolinks.storage")


def encode_record(stored: StoredEvent) -> str:
    """Serialize a stored event as a single JSON line (no trailing newline)."""
    data = stored.model_dump(by_alias=True, exclude_none=True)
    record = {"type": data.pop("type")}
    record.update(data)
    return json.dumps(record, ensure_ascii=False, separators=(",", ":"))


def decode_records(lines: Iterable[str]) -> List[StoredEvent]:
    """
    Parse log lines into stored events, in order.

    Blank lines are ignored. Malformed lines are skipped with a warning that
    carries the line number only; record content is never logged.
    """
    events: List[StoredEvent] = []
    for lineno, raw in enumerate(lines, start=1):
        line = raw.strip()
        if not line:
            continue
        try:
            events.append(parse_stored_event(json.loads(line)))
        except (ValueError, ValidationError):
            # json.JSONDecodeError is a ValueError
            log.warning("Skipping malformed event record at line %d", lineno)
    return events
