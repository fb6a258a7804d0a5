"""Qt UI components for the tryout application."""

from .dialog_helpers import (
    check_unsaved_changes,
    confirm_delete_question,
    confirm_delete_tryout,
    report_error,
    show_error,
    show_info,
    show_warning,
)
from .main_window import TryoutMainWindow
from .question_renderer import render_statement

__all__ = [
    "TryoutMainWindow",
    "check_unsaved_changes",
    "confirm_delete_question",
    "confirm_delete_tryout",
    "report_error",
    "show_error",
    "show_info",
    "show_warning",
    "render_statement",
]
