"""
Key-value storage for the persisted task list.

Architecture Decision: Why a key-value interface?
The timer only ever reads and writes one serialized document. Hiding the
database behind ``get``/``set`` keeps the store testable with an in-memory
dict and lets the backend change without touching the accounting logic.
"""

from abc import ABC, abstractmethod
from typing import Dict, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tasktimer.infra.db import DatabaseEngine, KeyValueModel, get_engine


class KeyValueStore(ABC):
    """Asynchronous string-keyed store"""

    @abstractmethod
    async def get(self, key: str) -> Optional[str]:
        """Return the value stored under ``key`` or None"""

    @abstractmethod
    async def set(self, key: str, value: str) -> bool:
        """Store ``value`` under ``key``; returns True once written"""


class MemoryKeyValueStore(KeyValueStore):
    """
    Dict-backed store. Nothing survives the process; used by tests and
    throwaway sessions.
    """

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self.data: Dict[str, str] = dict(initial or {})
        self.writes = 0

    async def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.data[key] = value
        self.writes += 1
        return True


class SqlKeyValueStore(KeyValueStore):
    """
    Key-value store on top of the application database (``kv_store`` table).

    Follows the repository convention: a session can be injected for tests,
    otherwise a fresh one is taken from the engine for every call.
    """

    def __init__(self, session: Optional[AsyncSession] = None,
                 engine: Optional[DatabaseEngine] = None):
        self.session = session
        self.engine = engine

    async def _get_session(self) -> AsyncSession:
        """Get session - either injected or create new one"""
        if self.session:
            return self.session
        engine = self.engine or get_engine()
        return engine.get_session()

    async def get(self, key: str) -> Optional[str]:
        session = await self._get_session()
        async with session:
            result = await session.execute(
                select(KeyValueModel.value).where(KeyValueModel.key == key)
            )
            return result.scalar_one_or_none()

    async def set(self, key: str, value: str) -> bool:
        session = await self._get_session()
        async with session:
            await session.merge(KeyValueModel(key=key, value=value))
            await session.commit()
            return True
