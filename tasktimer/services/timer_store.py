"""
Timer Store - Core elapsed-time accounting.

Architecture Decision: Observer Pattern (Qt Signals)
The store emits signals when its state changes, keeping it decoupled from UI.

Architecture Decision: State vs. display
Stored state only changes on add/pause/resume/reset/remove. What the user
sees is derived on demand by ``query_elapsed`` from the wall clock, so one
shared redraw timer is enough and no time is lost while the app is suspended
or closed.
"""

import asyncio
import logging
from typing import Callable, List, Optional, Set

from PySide6.QtCore import QObject, Signal

from tasktimer.domain.errors import NotFoundError, ValidationError
from tasktimer.domain.models import Task, dump_tasks, parse_tasks
from tasktimer.infra.storage import KeyValueStore
from tasktimer.utils import now_ms

logger = logging.getLogger(__name__)


class TimerStore(QObject):
    """
    Owns the task list, its time accounting and the persistence round-trip.

    All timestamps are integer epoch milliseconds. Every operation accepts an
    explicit ``now``; when omitted the injected clock is used.
    """

    # Signals
    task_added = Signal(str)  # task_id
    task_changed = Signal(str)  # task_id
    task_removed = Signal(str)  # task_id
    tasks_loaded = Signal(int)  # number of tasks

    def __init__(self, storage: KeyValueStore, storage_key: str = "tasks",
                 clock: Optional[Callable[[], int]] = None,
                 loop: Optional[asyncio.AbstractEventLoop] = None):
        super().__init__()
        self.storage = storage
        self.storage_key = storage_key
        self.clock = clock or now_ms

        # Loop used for saves scheduled while no event loop is running
        self.loop = loop

        self._tasks: List[Task] = []
        self._save_lock: Optional[asyncio.Lock] = None
        self._pending_saves: Set[asyncio.Task] = set()

    # ---- reads ----

    @property
    def tasks(self) -> List[Task]:
        """Snapshot of all tasks in creation order"""
        return [task.model_copy() for task in self._tasks]

    def __len__(self) -> int:
        return len(self._tasks)

    def __contains__(self, task_id: object) -> bool:
        return self._find(task_id) is not None

    def get_task(self, task_id: str) -> Optional[Task]:
        task = self._find(task_id)
        return task.model_copy() if task else None

    def require_task(self, task_id: str) -> Task:
        """Like get_task, but raises NotFoundError for an unknown id"""
        task = self.get_task(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task

    def running_count(self) -> int:
        return sum(1 for task in self._tasks if task.running)

    def query_elapsed(self, task_id: str, now: Optional[int] = None) -> int:
        """
        Displayed elapsed seconds of a task at ``now``.

        Pure read: safe to call on every redraw, never touches stored state.

        Raises:
            NotFoundError: if the task does not exist
        """
        task = self._find(task_id)
        if task is None:
            raise NotFoundError(task_id)
        return task.elapsed(self._now(now))

    # ---- mutations ----

    def add_task(self, name: str, now: Optional[int] = None) -> str:
        """
        Create a task that starts running immediately.

        Returns:
            The new task id

        Raises:
            ValidationError: if the name is empty or whitespace only
        """
        if not isinstance(name, str) or not name.strip():
            raise ValidationError("Please enter a task name.")

        task = Task(name=name, running=True, started_at=self._now(now))

        self._tasks.append(task)
        logger.info("Task added id=%s name=%r", task.id, task.name)

        self._schedule_save()
        self.task_added.emit(task.id)
        return task.id

    def toggle(self, task_id: str, now: Optional[int] = None) -> bool:
        """Pause a running task or resume a paused one"""
        task = self._find(task_id)
        if task is None:
            logger.debug("toggle ignored: unknown task %s", task_id)
            return False
        if task.running:
            return self.pause(task_id, now)
        return self.resume(task_id, now)

    def pause(self, task_id: str, now: Optional[int] = None) -> bool:
        """
        Bank the running interval into the accumulated seconds.

        Pausing a paused task changes nothing.
        """
        task = self._find(task_id)
        if task is None:
            logger.debug("pause ignored: unknown task %s", task_id)
            return False
        if not task.running:
            return True

        task.accumulated_seconds += task.current_interval_seconds(self._now(now))
        task.running = False
        task.started_at = None
        logger.debug("Task paused id=%s accumulated=%s", task.id, task.accumulated_seconds)

        self._changed(task)
        return True

    def resume(self, task_id: str, now: Optional[int] = None) -> bool:
        """
        Start a new running interval. Accumulated seconds are kept.

        Resuming a running task does not restart its interval.
        """
        task = self._find(task_id)
        if task is None:
            logger.debug("resume ignored: unknown task %s", task_id)
            return False
        if task.running:
            return True

        task.started_at = self._now(now)
        task.running = True
        logger.debug("Task resumed id=%s started_at=%s", task.id, task.started_at)

        self._changed(task)
        return True

    def reset(self, task_id: str) -> bool:
        """Zero a task and leave it paused. Callers confirm with the user first."""
        task = self._find(task_id)
        if task is None:
            logger.debug("reset ignored: unknown task %s", task_id)
            return False

        task.accumulated_seconds = 0
        task.running = False
        task.started_at = None
        logger.info("Task reset id=%s", task.id)

        self._changed(task)
        return True

    def remove(self, task_id: str) -> bool:
        """Delete a task permanently. Callers confirm with the user first."""
        task = self._find(task_id)
        if task is None:
            logger.debug("remove ignored: unknown task %s", task_id)
            return False

        self._tasks.remove(task)
        logger.info("Task removed id=%s name=%r", task.id, task.name)

        self._schedule_save()
        self.task_removed.emit(task.id)
        return True

    # ---- persistence ----

    async def load(self) -> None:
        """
        Replace the in-memory list with the persisted one.

        Never raises: missing, unreadable or corrupt data gives an empty list.
        Running tasks keep their original start, so time spent while the app
        was closed is included by ``query_elapsed`` without any correction.
        """
        now = self.clock()
        try:
            raw = await self.storage.get(self.storage_key)
        except Exception:
            logger.exception("Failed to read task list; starting with no tasks")
            raw = None

        tasks: List[Task] = []
        skipped = 0
        if raw:
            try:
                tasks, skipped = parse_tasks(raw, now)
            except ValueError as e:
                logger.warning("Stored task list is unreadable (%s); starting with no tasks", e)
                raw = None

        self._tasks = tasks
        logger.info("Loaded %d task(s), %d running", len(tasks), self.running_count())

        # Rewrite older formats so the next start sees the same state.
        # Dropped records stay in storage until the next mutation.
        if raw and not skipped and dump_tasks(tasks) != raw:
            self._schedule_save()

        self.tasks_loaded.emit(len(tasks))

    async def save(self) -> bool:
        """
        Persist the current task list.

        Writes are serialized, and each one snapshots the list at write time,
        so the state after the last mutation is what ends up stored. Failures
        are logged and reported as False; memory stays authoritative.
        """
        if self._save_lock is None:
            self._save_lock = asyncio.Lock()

        async with self._save_lock:
            payload = dump_tasks(self._tasks)
            try:
                await self.storage.set(self.storage_key, payload)
            except Exception:
                logger.exception("Failed to persist %d task(s)", len(self._tasks))
                return False

        logger.debug("Persisted %d task(s)", len(self._tasks))
        return True

    async def flush(self) -> None:
        """Wait for every scheduled save to finish"""
        while self._pending_saves:
            await asyncio.gather(*list(self._pending_saves))

    def run_pending(self) -> None:
        """
        Drive queued saves to completion from synchronous code.

        Used by the UI between Qt events, when the asyncio loop is idle.
        """
        if not self._pending_saves:
            return
        loop = self._get_loop()
        if loop.is_running():
            return
        loop.run_until_complete(self.flush())

    @property
    def has_pending_saves(self) -> bool:
        return bool(self._pending_saves)

    # ---- internals ----

    def _find(self, task_id: object) -> Optional[Task]:
        return next((t for t in self._tasks if t.id == task_id), None)

    def _now(self, now: Optional[int]) -> int:
        return self.clock() if now is None else int(now)

    def _changed(self, task: Task) -> None:
        self._schedule_save()
        self.task_changed.emit(task.id)

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        if self.loop is None:
            self.loop = asyncio.new_event_loop()
        return self.loop

    def _schedule_save(self) -> None:
        """Fire-and-forget save of the full list"""
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            loop = self._get_loop()

        save = loop.create_task(self.save())
        self._pending_saves.add(save)
        save.add_done_callback(self._pending_saves.discard)
