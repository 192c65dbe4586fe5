"""
Domain Models using Pydantic for validation.

Architecture Decision: Why Pydantic?
The whole task list is stored as one JSON document. Pydantic validates every
record coming back from storage, so a hand-edited or older file can never put
a task into an impossible state (negative time, running without a start).

Architecture Decision: Absolute timestamps instead of ticking counters
A running task only remembers *when* its current interval began. The time
shown to the user is derived from the wall clock on every read, so nothing has
to run in the background and time that passed while the app was closed is
counted automatically.
"""

import json
import logging
import uuid
from typing import List, Optional, Tuple

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    ValidationError as PydanticValidationError,
    model_validator,
)

logger = logging.getLogger(__name__)


def new_task_id() -> str:
    """Generate an opaque, never reused task identifier"""
    return uuid.uuid4().hex


class Task(BaseModel):
    """
    Represents one tracked activity.

    Serialized field names follow the storage format (camelCase). Older
    payloads using ``accumulated``/``startTimestamp`` or the legacy ``time``
    counter are accepted on read.
    """
    model_config = ConfigDict(str_strip_whitespace=True)

    id: str = Field(default_factory=new_task_id, min_length=1)
    name: str = Field(..., min_length=1)
    accumulated_seconds: int = Field(
        default=0,
        ge=0,
        validation_alias=AliasChoices(
            "accumulated_seconds", "accumulatedSeconds", "accumulated", "time"
        ),
        serialization_alias="accumulatedSeconds",
    )
    running: bool = False
    started_at: Optional[int] = Field(
        default=None,
        validation_alias=AliasChoices("started_at", "startedAt", "startTimestamp"),
        serialization_alias="startedAt",
    )

    @model_validator(mode="after")
    def _drop_stale_start(self) -> "Task":
        # A paused task never carries a start timestamp
        if not self.running and self.started_at is not None:
            self.started_at = None
        return self

    def current_interval_seconds(self, now: int) -> int:
        """Whole seconds of the running interval at ``now`` (0 when paused)"""
        if not self.running or self.started_at is None:
            return 0
        # Clock moved backwards: count nothing rather than go negative
        return max(0, (now - self.started_at) // 1000)

    def elapsed(self, now: int) -> int:
        """Displayed elapsed seconds at ``now`` (epoch milliseconds)"""
        return self.accumulated_seconds + self.current_interval_seconds(now)


class UserPreferences(BaseModel):
    """
    User configuration and preferences for the desktop shell.
    """
    model_config = ConfigDict(from_attributes=True)

    language: str = Field(default="auto", description="UI language: 'en', 'de', or 'auto' (detect from system)")
    confirm_destructive_actions: bool = Field(
        default=True,
        description="Ask before resetting or removing a task"
    )
    always_on_top: bool = Field(default=False, description="Keep the main window above other windows")


_TASK_LIST = TypeAdapter(List[Task])


def dump_tasks(tasks: List[Task]) -> str:
    """Serialize the full task list to the storage JSON format"""
    return _TASK_LIST.dump_json(tasks, by_alias=True).decode("utf-8")


def parse_tasks(raw: str, now: int) -> Tuple[List[Task], int]:
    """
    Deserialize a stored task list.

    Returns the tasks and the number of records that were dropped.
    Raises ValueError when the payload is not a JSON array. Records that fail
    validation are skipped, and duplicate ids keep their first occurrence.
    A running record without a start timestamp (legacy format) is treated
    as started at ``now``.
    """
    data = json.loads(raw)
    if not isinstance(data, list):
        raise ValueError(f"Expected a JSON array of tasks, got {type(data).__name__}")

    tasks: List[Task] = []
    skipped = 0
    seen = set()
    for index, record in enumerate(data):
        try:
            task = Task.model_validate(record)
        except PydanticValidationError as e:
            logger.warning("Skipping invalid task record #%d: %s", index, e)
            skipped += 1
            continue

        if task.id in seen:
            logger.warning("Skipping duplicate task id %s", task.id)
            skipped += 1
            continue
        seen.add(task.id)

        if task.running and task.started_at is None:
            task.started_at = now
        tasks.append(task)

    return tasks, skipped
