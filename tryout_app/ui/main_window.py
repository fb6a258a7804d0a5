"""Qt main window switching between dashboard, editor and quiz modes."""

from __future__ import annotations

from enum import Enum, auto

from PySide6.QtWidgets import (
    QHBoxLayout,
    QMainWindow,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from tryout_app.constants.about import APP_ABOUT_TEXT, APP_LICENSE, APP_NAME, APP_VERSION, HELP_TEXT
from tryout_app.constants.ui_constants import MODE_BUTTON_DASHBOARD, MODE_BUTTON_NEW, WINDOW_TITLE
from tryout_app.core.tryout_manager import TryoutManager
from tryout_app.styling.styles import Styles
from tryout_app.ui.components.dashboard_panel import DashboardPanel
from tryout_app.ui.components.quiz_panel import QuizPanel
from tryout_app.ui.components.tryout_editor_panel import TryoutEditorPanel
from tryout_app.ui.dialog_helpers import show_info


class AppMode(Enum):
    """High-level UI mode for the tryout window."""

    DASHBOARD = auto()
    EDITOR = auto()
    QUIZ = auto()


class TryoutMainWindow(QMainWindow):
    """Main Qt window orchestrating the three application modes."""

    def __init__(self, tryout_manager: TryoutManager) -> None:
        super().__init__()
        self.setWindowTitle(WINDOW_TITLE)
        self.resize(1100, 760)

        self.tryout_manager = tryout_manager
        self._mode = AppMode.DASHBOARD

        self._build_ui()
        self.setStyleSheet(Styles.get_main_window_style())
        self.dashboard_panel.refresh_tryouts()

    def _build_ui(self) -> None:
        central_widget = QWidget(self)
        self.setCentralWidget(central_widget)

        root_layout = QVBoxLayout()
        central_widget.setLayout(root_layout)

        self._build_mode_buttons(root_layout)

        self.mode_stack = QStackedWidget(self)
        self.dashboard_panel = DashboardPanel(
            self.tryout_manager,
            on_edit_tryout=self._handle_edit_tryout,
            on_take_tryout=self._handle_take_tryout,
            parent=self,
        )
        self.editor_panel = TryoutEditorPanel(
            self.tryout_manager,
            on_tryout_saved=self.dashboard_panel.refresh_tryouts,
            parent=self,
        )
        self.quiz_panel = QuizPanel(self.tryout_manager, self)

        self.mode_stack.addWidget(self.dashboard_panel)
        self.mode_stack.addWidget(self.editor_panel)
        self.mode_stack.addWidget(self.quiz_panel)
        root_layout.addWidget(self.mode_stack)

        self._set_mode(AppMode.DASHBOARD)

    def _build_mode_buttons(self, layout: QVBoxLayout) -> None:
        button_row = QHBoxLayout()

        self.dashboard_mode_button = QPushButton(MODE_BUTTON_DASHBOARD, self)
        self.dashboard_mode_button.setCheckable(True)
        self.dashboard_mode_button.clicked.connect(self._handle_show_dashboard)
        button_row.addWidget(self.dashboard_mode_button)

        self.new_mode_button = QPushButton(MODE_BUTTON_NEW, self)
        self.new_mode_button.setCheckable(True)
        self.new_mode_button.clicked.connect(self._handle_new_tryout)
        button_row.addWidget(self.new_mode_button)
        button_row.addStretch()

        self.about_button = QPushButton(f"About {APP_NAME}", self)
        self.about_button.clicked.connect(self._handle_about)
        button_row.addWidget(self.about_button)

        self.help_button = QPushButton("Help", self)
        self.help_button.clicked.connect(self._handle_help)
        button_row.addWidget(self.help_button)

        layout.addLayout(button_row)

    def _set_mode(self, mode: AppMode) -> None:
        self._mode = mode
        self.dashboard_mode_button.setChecked(mode == AppMode.DASHBOARD)
        self.new_mode_button.setChecked(mode == AppMode.EDITOR and not self.tryout_manager.has_open_tryout())

        index_map = {
            AppMode.DASHBOARD: 0,
            AppMode.EDITOR: 1,
            AppMode.QUIZ: 2,
        }
        self.mode_stack.setCurrentIndex(index_map[mode])

    def _leave_current_mode(self) -> bool:
        """Run the exit checks of the active mode. Returns False if the user cancelled."""
        if self._mode == AppMode.EDITOR:
            return self.editor_panel.check_unsaved_changes()
        if self._mode == AppMode.QUIZ:
            self.quiz_panel.abandon()
        return True

    def _handle_show_dashboard(self) -> None:
        if not self._leave_current_mode():
            self._set_mode(self._mode)
            return
        self.dashboard_panel.refresh_tryouts()
        self._set_mode(AppMode.DASHBOARD)

    def _handle_new_tryout(self) -> None:
        if not self._leave_current_mode():
            self._set_mode(self._mode)
            return
        self.editor_panel.start_new_tryout()
        self._set_mode(AppMode.EDITOR)

    def _handle_edit_tryout(self, tryout_id: str) -> None:
        if self.editor_panel.open_tryout(tryout_id):
            self._set_mode(AppMode.EDITOR)

    def _handle_take_tryout(self, tryout_id: str) -> None:
        if self.quiz_panel.open_tryout(tryout_id):
            self._set_mode(AppMode.QUIZ)

    def _handle_about(self) -> None:
        details = f"{APP_NAME} v{APP_VERSION}\nLicense: {APP_LICENSE}\n\n{APP_ABOUT_TEXT}"
        show_info(self, f"About {APP_NAME}", details)

    def _handle_help(self) -> None:
        show_info(self, f"{APP_NAME} Help", HELP_TEXT)

    def closeEvent(self, event) -> None:  # noqa: N802 - Qt override
        if self._mode == AppMode.EDITOR and not self.editor_panel.check_unsaved_changes():
            event.ignore()
            return
        event.accept()
