from .base import BaseStorage
from .storage import FileStorage, MemoryStorage
from .storage_factory import get_storage

__all__ = ["BaseStorage", "FileStorage", "MemoryStorage", "get_storage"]
