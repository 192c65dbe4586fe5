"""UI layer - PySide6 GUI components"""

from .app import TimerApp
from .main_window import MainWindow, TaskRow

__all__ = ["TimerApp", "MainWindow", "TaskRow"]
