"""
aerolinks_analytics package initializer.
"""

from . import analytics
from . import events
from . import storage

__all__ = ["analytics", "events", "storage"]
