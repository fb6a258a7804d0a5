"""Centralized stylesheet for the tryout application."""

from __future__ import annotations

# Light theme only.
TEXT_PRIMARY = "#111827"
TEXT_SECONDARY = "#6B7280"
BACKGROUND_PRIMARY = "#FFFFFF"
BACKGROUND_SECONDARY = "#F3F4F6"
BORDER = "#D1D5DB"
ACCENT = "#2563EB"
ACCENT_TEXT = "#FFFFFF"
SUCCESS = "#15803D"
DANGER = "#B91C1C"


class Styles:
    """Helper class returning Qt stylesheets."""

    @staticmethod
    def get_main_window_style() -> str:
        return f"""
            QWidget {{
                background-color: {BACKGROUND_PRIMARY};
                color: {TEXT_PRIMARY};
                font-family: 'Segoe UI', 'Roboto', sans-serif;
                font-size: 14px;
            }}
            QPushButton {{
                background-color: {BACKGROUND_SECONDARY};
                border: 1px solid {BORDER};
                border-radius: 4px;
                padding: 6px 12px;
            }}
            QPushButton:checked, QPushButton[primary="true"] {{
                background-color: {ACCENT};
                color: {ACCENT_TEXT};
                border: 1px solid {ACCENT};
            }}
            QPushButton:disabled {{
                color: {TEXT_SECONDARY};
            }}
            QLineEdit, QPlainTextEdit, QSpinBox {{
                border: 1px solid {BORDER};
                border-radius: 4px;
                padding: 4px;
            }}
            QListWidget {{
                border: 1px solid {BORDER};
                border-radius: 4px;
            }}
            QGroupBox {{
                border: 1px solid {BORDER};
                border-radius: 6px;
                margin-top: 6px;
                padding-top: 10px;
            }}
            QGroupBox::title {{
                subcontrol-origin: margin;
                left: 10px;
                padding: 0 3px 0 3px;
            }}
        """

    @staticmethod
    def get_large_label_style() -> str:
        return "font-size: 16pt; font-weight: bold;"

    @staticmethod
    def get_muted_label_style() -> str:
        return f"color: {TEXT_SECONDARY};"

    @staticmethod
    def get_score_label_style(passed: bool) -> str:
        color = SUCCESS if passed else DANGER
        return f"font-size: 20pt; font-weight: bold; color: {color};"
