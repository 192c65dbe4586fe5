"""Domain layer - Pure business entities and errors"""

from .errors import TimerError, ValidationError, NotFoundError
from .models import Task, UserPreferences, dump_tasks, parse_tasks

__all__ = [
    "Task",
    "UserPreferences",
    "dump_tasks",
    "parse_tasks",
    "TimerError",
    "ValidationError",
    "NotFoundError",
]
