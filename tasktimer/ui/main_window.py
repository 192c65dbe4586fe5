"""
Main Window - Task list with per-task timer controls.

Architecture Decision: One shared refresh timer
Rows never count time themselves. A single QTimer asks the store for the
derived elapsed time of every task, so the number of running tasks has no
effect on timer resources.
"""

from typing import Dict

from PySide6.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QLineEdit,
    QLabel, QPushButton, QScrollArea
)
from PySide6.QtCore import Qt, QTimer, Signal
from PySide6.QtGui import QFont

from tasktimer.domain.errors import ValidationError
from tasktimer.domain.models import Task, UserPreferences
from tasktimer.i18n import tr
from tasktimer.services import TimerStore
from tasktimer.utils import format_duration
from .dialogs import confirm_remove, confirm_reset, show_error


class TaskRow(QWidget):
    """One task: name, elapsed time and its three actions"""

    toggle_requested = Signal(str)
    reset_requested = Signal(str)
    remove_requested = Signal(str)

    def __init__(self, task: Task, parent=None):
        super().__init__(parent)
        self.task_id = task.id
        self.task_name = task.name

        layout = QHBoxLayout(self)
        layout.setContentsMargins(4, 4, 4, 4)

        text_layout = QVBoxLayout()
        self.name_label = QLabel(task.name)
        font = QFont()
        font.setBold(True)
        self.name_label.setFont(font)
        self.time_label = QLabel(format_duration(0))
        text_layout.addWidget(self.name_label)
        text_layout.addWidget(self.time_label)
        layout.addLayout(text_layout, 1)

        self.toggle_button = QPushButton()
        self.reset_button = QPushButton(tr("main.reset"))
        self.remove_button = QPushButton(tr("main.remove"))
        for button in (self.toggle_button, self.reset_button, self.remove_button):
            layout.addWidget(button)

        self.toggle_button.clicked.connect(lambda: self.toggle_requested.emit(self.task_id))
        self.reset_button.clicked.connect(lambda: self.reset_requested.emit(self.task_id))
        self.remove_button.clicked.connect(lambda: self.remove_requested.emit(self.task_id))

        self.set_running(task.running)

    def set_running(self, running: bool):
        self.toggle_button.setText(tr("main.pause") if running else tr("main.start"))

    def set_elapsed(self, seconds: int):
        self.time_label.setText(format_duration(seconds))


class MainWindow(QMainWindow):
    """
    Task list window.

    Features:
    - Name input with Add button (Enter also adds)
    - One row per task with Pause/Start, Reset and Remove
    - Confirmation before Reset and Remove
    """

    def __init__(self, store: TimerStore, preferences: UserPreferences,
                 refresh_interval_ms: int = 1000, parent=None):
        super().__init__(parent)
        self.store = store
        self.preferences = preferences
        self.rows: Dict[str, TaskRow] = {}

        self.setWindowTitle(tr("main.title"))
        if preferences.always_on_top:
            self.setWindowFlags(self.windowFlags() | Qt.WindowStaysOnTopHint)
        self.resize(480, 560)

        self._setup_ui()
        self._connect_signals()
        self._rebuild_rows()

        # Display refresh only; stored state is never touched here
        self.refresh_timer = QTimer(self)
        self.refresh_timer.timeout.connect(self._on_tick)
        self.refresh_timer.start(refresh_interval_ms)

    def _setup_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)

        input_layout = QHBoxLayout()
        self.task_input = QLineEdit()
        self.task_input.setPlaceholderText(tr("main.task_placeholder"))
        self.add_button = QPushButton(tr("main.add"))
        input_layout.addWidget(self.task_input, 1)
        input_layout.addWidget(self.add_button)
        layout.addLayout(input_layout)

        self.list_container = QWidget()
        self.list_layout = QVBoxLayout(self.list_container)
        self.list_layout.setAlignment(Qt.AlignTop)
        self.empty_label = QLabel(tr("main.empty"))
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.list_layout.addWidget(self.empty_label)

        scroll = QScrollArea()
        scroll.setWidgetResizable(True)
        scroll.setWidget(self.list_container)
        layout.addWidget(scroll, 1)

        self.summary_label = QLabel()
        layout.addWidget(self.summary_label)

        self.setCentralWidget(central)

    def _connect_signals(self):
        self.add_button.clicked.connect(self._on_add_clicked)
        self.task_input.returnPressed.connect(self._on_add_clicked)

        self.store.task_added.connect(self._on_task_added)
        self.store.task_changed.connect(self._on_task_changed)
        self.store.task_removed.connect(self._on_task_removed)
        self.store.tasks_loaded.connect(lambda _count: self._rebuild_rows())

    # ---- store events ----

    def _rebuild_rows(self):
        for row in self.rows.values():
            self.list_layout.removeWidget(row)
            row.deleteLater()
        self.rows.clear()
        for task in self.store.tasks:
            self._add_row(task)
        self._refresh_display()

    def _add_row(self, task: Task):
        row = TaskRow(task)
        row.toggle_requested.connect(self._on_toggle)
        row.reset_requested.connect(self._on_reset)
        row.remove_requested.connect(self._on_remove)
        self.list_layout.addWidget(row)
        self.rows[task.id] = row

    def _on_task_added(self, task_id: str):
        task = self.store.get_task(task_id)
        if task:
            self._add_row(task)
        self._after_mutation()

    def _on_task_changed(self, task_id: str):
        task = self.store.get_task(task_id)
        row = self.rows.get(task_id)
        if task and row:
            row.set_running(task.running)
        self._after_mutation()

    def _on_task_removed(self, task_id: str):
        row = self.rows.pop(task_id, None)
        if row:
            self.list_layout.removeWidget(row)
            row.deleteLater()
        self._after_mutation()

    def _after_mutation(self):
        self._refresh_display()
        # Write once control is back in the Qt event loop
        QTimer.singleShot(0, self.store.run_pending)

    def _refresh_display(self):
        now = self.store.clock()
        for task_id, row in self.rows.items():
            row.set_elapsed(self.store.query_elapsed(task_id, now))

        self.empty_label.setVisible(not self.rows)
        self.summary_label.setText(
            tr("main.summary", count=len(self.store), running=self.store.running_count())
        )

    def _on_tick(self):
        """Re-derive displayed times and let queued saves run"""
        self._refresh_display()
        self.store.run_pending()

    # ---- user actions ----

    def _on_add_clicked(self):
        try:
            self.store.add_task(self.task_input.text())
        except ValidationError:
            show_error(self, tr("error.empty_name"))
            return
        self.task_input.clear()

    def _on_toggle(self, task_id: str):
        self.store.toggle(task_id)

    def _on_reset(self, task_id: str):
        row = self.rows.get(task_id)
        if row is None:
            return
        if self.preferences.confirm_destructive_actions and not confirm_reset(self, row.task_name):
            return
        self.store.reset(task_id)

    def _on_remove(self, task_id: str):
        row = self.rows.get(task_id)
        if row is None:
            return
        if self.preferences.confirm_destructive_actions and not confirm_remove(self, row.task_name):
            return
        self.store.remove(task_id)

    def closeEvent(self, event):
        self.refresh_timer.stop()
        super().closeEvent(event)
