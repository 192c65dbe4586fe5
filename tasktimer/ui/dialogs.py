"""
Dialogs for confirming destructive actions.
"""

from PySide6.QtWidgets import QMessageBox, QWidget

from tasktimer.i18n import tr


def confirm_action(parent: QWidget, title_key: str, message_key: str, name: str) -> bool:
    """
    Ask the user to confirm an irreversible action on a task.

    Returns True when the user accepted.
    """
    reply = QMessageBox.question(
        parent,
        tr(title_key),
        tr(message_key, name=name),
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No
    )
    return reply == QMessageBox.Yes


def confirm_reset(parent: QWidget, name: str) -> bool:
    return confirm_action(parent, "task.reset_title", "task.reset_message", name)


def confirm_remove(parent: QWidget, name: str) -> bool:
    return confirm_action(parent, "task.remove_title", "task.remove_message", name)


def show_error(parent: QWidget, message: str) -> None:
    QMessageBox.warning(parent, tr("error"), message)
