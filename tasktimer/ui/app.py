"""
Task Timer Application - wires settings, storage, store and window.

Architecture Decision: Presentation Layer
This layer only handles UI logic. Time accounting is delegated to TimerStore.
"""

import sys
import asyncio
import logging

from PySide6.QtWidgets import QApplication

from tasktimer.i18n import set_language, tr
from tasktimer.infra.config import get_settings
from tasktimer.infra.db import DatabaseEngine, init_db
from tasktimer.infra.storage import SqlKeyValueStore
from tasktimer.services import TimerStore
from .main_window import MainWindow

logger = logging.getLogger(__name__)


class TimerApp:
    """
    Main application class.

    Qt owns the event loop. Coroutines (database setup, load, saves) run on a
    private asyncio loop that is driven from Qt callbacks.
    """

    def __init__(self):
        self.app = QApplication(sys.argv)
        self.settings = get_settings()

        set_language(self.settings.preferences.language)
        self.app.setApplicationName(tr("app.name"))

        # Event loop for async operations
        self.loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self.loop)

        engine = self.loop.run_until_complete(init_db(self.settings.get_db_url()))
        logger.info("Database ready at %s", engine.db_url)

        self.store = TimerStore(
            SqlKeyValueStore(engine=engine),
            storage_key=self.settings.storage_key,
            loop=self.loop,
        )
        self.loop.run_until_complete(self.store.load())

        self.main_window = MainWindow(
            self.store,
            self.settings.preferences,
            refresh_interval_ms=self.settings.refresh_interval_ms,
        )
        self.app.aboutToQuit.connect(self._shutdown)

    def _shutdown(self):
        """Let the last write land before the process exits"""
        self.loop.run_until_complete(self.store.flush())
        self.loop.run_until_complete(DatabaseEngine.reset_instance())
        self.loop.close()

    def run(self):
        """Run the application"""
        self.main_window.show()
        return self.app.exec()
