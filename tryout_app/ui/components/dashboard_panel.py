"""Component listing tryouts with search and per-tryout actions."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from tryout_app.constants.ui_constants import (
    DASHBOARD_DELETE_BUTTON,
    DASHBOARD_EDIT_BUTTON,
    DASHBOARD_EMPTY_STATE,
    DASHBOARD_REFRESH_BUTTON,
    DASHBOARD_TAKE_BUTTON,
    NO_TRYOUT_SELECTED_MESSAGE,
    PLACEHOLDER_SEARCH,
)
from tryout_app.core.errors import TryoutAppError
from tryout_app.core.models import Tryout, TryoutFilters
from tryout_app.core.services.tryout_stats import format_relative_time
from tryout_app.core.tryout_manager import TryoutManager
from tryout_app.styling.styles import Styles
from tryout_app.ui.dialog_helpers import confirm_delete_tryout, report_error, show_info


class DashboardPanel(QWidget):
    """UI component for browsing, opening and deleting tryouts."""

    def __init__(
        self,
        tryout_manager: TryoutManager,
        on_edit_tryout: Callable[[str], None],
        on_take_tryout: Callable[[str], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.tryout_manager = tryout_manager
        self.on_edit_tryout = on_edit_tryout
        self.on_take_tryout = on_take_tryout
        self._tryouts: list[Tryout] = []

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        title_label = QLabel("Tryouts", self)
        title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(title_label)

        search_row = QHBoxLayout()
        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText(PLACEHOLDER_SEARCH)
        self.search_input.returnPressed.connect(self.refresh_tryouts)
        search_row.addWidget(self.search_input, stretch=1)

        self.refresh_button = QPushButton(DASHBOARD_REFRESH_BUTTON, self)
        self.refresh_button.clicked.connect(self.refresh_tryouts)
        search_row.addWidget(self.refresh_button)
        layout.addLayout(search_row)

        self.tryout_list = QListWidget(self)
        self.tryout_list.setAlternatingRowColors(True)
        self.tryout_list.itemDoubleClicked.connect(lambda _: self._handle_take())
        layout.addWidget(self.tryout_list, stretch=1)

        self.empty_label = QLabel(DASHBOARD_EMPTY_STATE, self)
        self.empty_label.setAlignment(Qt.AlignCenter)
        self.empty_label.setStyleSheet(Styles.get_muted_label_style())
        layout.addWidget(self.empty_label)

        action_row = QHBoxLayout()
        self.take_button = QPushButton(DASHBOARD_TAKE_BUTTON, self)
        self.take_button.clicked.connect(self._handle_take)
        action_row.addWidget(self.take_button)

        self.edit_button = QPushButton(DASHBOARD_EDIT_BUTTON, self)
        self.edit_button.clicked.connect(self._handle_edit)
        action_row.addWidget(self.edit_button)

        self.delete_button = QPushButton(DASHBOARD_DELETE_BUTTON, self)
        self.delete_button.clicked.connect(self._handle_delete)
        action_row.addWidget(self.delete_button)
        layout.addLayout(action_row)

    def refresh_tryouts(self) -> None:
        query = self.search_input.text().strip()
        filters = TryoutFilters(title=query) if query else None
        try:
            self._tryouts = self.tryout_manager.list_tryouts(filters)
        except TryoutAppError as exc:
            report_error(self, "Failed to load tryouts", exc)
            return

        self.tryout_list.clear()
        for tryout in self._tryouts:
            count = tryout.question_count or 0
            text = (
                f"{tryout.title}  ·  {tryout.category or 'Uncategorized'}  ·  "
                f"{tryout.time_limit} min  ·  {count} question{'s' if count != 1 else ''}  ·  "
                f"created {format_relative_time(tryout.created_at)}"
            )
            item = QListWidgetItem(text, self.tryout_list)
            item.setData(Qt.UserRole, tryout.id)
            if tryout.description:
                item.setToolTip(tryout.description)
        self.empty_label.setVisible(not self._tryouts)

    def _selected_tryout(self) -> Tryout | None:
        item = self.tryout_list.currentItem()
        if item is None:
            show_info(self, "No selection", NO_TRYOUT_SELECTED_MESSAGE)
            return None
        tryout_id = item.data(Qt.UserRole)
        return next((t for t in self._tryouts if t.id == tryout_id), None)

    def _handle_take(self) -> None:
        tryout = self._selected_tryout()
        if tryout is not None:
            self.on_take_tryout(tryout.id)

    def _handle_edit(self) -> None:
        tryout = self._selected_tryout()
        if tryout is not None:
            self.on_edit_tryout(tryout.id)

    def _handle_delete(self) -> None:
        tryout = self._selected_tryout()
        if tryout is None or not confirm_delete_tryout(self, tryout.title):
            return
        try:
            self.tryout_manager.delete_tryout(tryout.id)
        except TryoutAppError as exc:
            report_error(self, "Failed to delete tryout", exc)
            return
        self.refresh_tryouts()
