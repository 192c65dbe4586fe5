"""Services layer - Business logic"""

from .timer_store import TimerStore

__all__ = ["TimerStore"]
