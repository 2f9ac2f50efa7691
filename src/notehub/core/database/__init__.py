"""In-memory state and its FastAPI dependency."""

from notehub.core.database.store import MemoryStore, get_store


__all__ = [
    "MemoryStore",
    "get_store",
]
