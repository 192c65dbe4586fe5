"""
Pytest configuration and fixtures.
"""

import sys
from pathlib import Path
import pytest
import pytest_asyncio

# Add project root
sys.path.insert(0, str(Path(__file__).parent.parent))

from tasktimer.infra.db import DatabaseEngine
from tasktimer.infra.storage import MemoryKeyValueStore, SqlKeyValueStore
from tasktimer.services import TimerStore


class FakeClock:
    """Controllable epoch-millisecond clock"""

    def __init__(self, now: int = 0):
        self.now = now

    def __call__(self) -> int:
        return self.now

    def advance(self, ms: int) -> None:
        self.now += ms


@pytest.fixture
def clock():
    return FakeClock(1_700_000_000_000)


@pytest.fixture
def memory_storage():
    return MemoryKeyValueStore()


@pytest.fixture
def store(memory_storage, clock):
    """TimerStore over an in-memory store; queued saves are drained on teardown"""
    timer_store = TimerStore(memory_storage, clock=clock)
    yield timer_store
    if timer_store.loop is not None:
        timer_store.run_pending()
        timer_store.loop.close()


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Create a file-backed SQLite database for testing"""
    engine = DatabaseEngine(f"sqlite+aiosqlite:///{tmp_path / 'tasktimer.db'}")
    await engine.create_tables()

    yield engine

    await engine.engine.dispose()


@pytest.fixture
def sql_storage(db_engine):
    return SqlKeyValueStore(engine=db_engine)
