"""Infrastructure layer - Database, storage and configuration"""

from .db import DatabaseEngine, get_engine, init_db
from .storage import KeyValueStore, MemoryKeyValueStore, SqlKeyValueStore

__all__ = [
    "DatabaseEngine",
    "get_engine",
    "init_db",
    "KeyValueStore",
    "MemoryKeyValueStore",
    "SqlKeyValueStore",
]
