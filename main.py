#!/usr/bin/env python

"""
Task Timer Application - Main Entry Point

A small desktop timer: add named tasks, pause/resume and reset them, and
keep the list (including running timers) across restarts.

Usage:
    python main.py

Requirements:
    - Python 3.10+
    - See pyproject.toml for dependencies
"""

import sys
import logging
from pathlib import Path

# Add project directory to path
sys.path.insert(0, str(Path(__file__).parent))

from tasktimer.infra.config import get_settings
from tasktimer.ui import TimerApp


def main():
    """Main entry point"""
    logging.basicConfig(
        level=get_settings().log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app = TimerApp()
    return app.run()


if __name__ == "__main__":
    sys.exit(main())
