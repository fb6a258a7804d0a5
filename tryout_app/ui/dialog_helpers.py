"""Helper functions for common dialog patterns in the tryout UI."""

from __future__ import annotations

import logging

from PySide6.QtWidgets import QMessageBox, QWidget

from tryout_app.core.errors import TryoutAppError, ValidationError

logger = logging.getLogger(__name__)


def confirm_delete_question(parent: QWidget, question_number: int) -> bool:
    """Show confirmation dialog for deleting a saved question.

    Args:
        parent: Parent widget for the dialog
        question_number: The question number to display (1-indexed)

    Returns:
        True if user confirmed, False otherwise
    """
    reply = QMessageBox.question(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete question {question_number}?",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def confirm_delete_tryout(parent: QWidget, title: str) -> bool:
    """Show confirmation dialog for deleting a whole tryout."""
    reply = QMessageBox.question(
        parent,
        "Confirm Delete",
        f"Are you sure you want to delete \"{title}\"? This action cannot be undone.",
        QMessageBox.Yes | QMessageBox.No,
        QMessageBox.No,
    )
    return reply == QMessageBox.Yes


def check_unsaved_changes(parent: QWidget) -> bool | None:
    """Ask what to do with unsaved questions before leaving the editor.

    Returns:
        True if user wants to save, False if discard, None if cancelled
    """
    reply = QMessageBox.question(
        parent,
        "Unsaved Changes",
        "Some questions are not saved. Do you want to save them?",
        QMessageBox.Yes | QMessageBox.No | QMessageBox.Cancel,
        QMessageBox.Yes,
    )

    if reply == QMessageBox.Yes:
        return True
    elif reply == QMessageBox.No:
        return False
    else:
        return None


def show_error(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.critical(parent, title, message)


def show_info(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.information(parent, title, message)


def show_warning(parent: QWidget, title: str, message: str) -> None:
    QMessageBox.warning(parent, title, message)


def report_error(parent: QWidget, action: str, exc: TryoutAppError) -> None:
    """Surface a failed user action; validation problems are warnings, the rest errors."""
    logger.warning("%s failed: %s", action, exc)
    if isinstance(exc, ValidationError):
        show_warning(parent, action, str(exc))
    else:
        show_error(parent, action, str(exc))
