"""Entity storage for the wellness tracker"""
from wellness.db.store import Storage, MemoryStore

__all__ = ["Storage", "MemoryStore"]
