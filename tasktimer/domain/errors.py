"""
Errors raised at the TimerStore boundary.

Only these exceptions are meant to reach callers. Storage failures are
logged and absorbed by the store instead.
"""


class TimerError(Exception):
    """Base class for all task timer errors"""


class ValidationError(TimerError, ValueError):
    """Raised when a task cannot be created from the given input"""


class NotFoundError(TimerError, LookupError):
    """Raised when a task id does not resolve to a task"""

    def __init__(self, task_id: str):
        super().__init__(f"Task {task_id} not found")
        self.task_id = task_id
