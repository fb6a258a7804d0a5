"""Component for creating and editing a tryout and its questions."""

from __future__ import annotations

from collections.abc import Callable

from PySide6.QtCore import Qt
from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QButtonGroup,
    QFormLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QPushButton,
    QRadioButton,
    QSpinBox,
    QVBoxLayout,
    QWidget,
)

from tryout_app.constants.quiz_constants import DEFAULT_QUESTION_POINTS, DEFAULT_TIME_LIMIT_MINUTES
from tryout_app.constants.ui_constants import (
    EDITOR_ADD_BUTTON,
    EDITOR_DELETE_BUTTON,
    EDITOR_NO_SELECTION,
    EDITOR_SAVE_ALL_BUTTON,
    EDITOR_SAVE_BUTTON,
    EDITOR_SAVE_TRYOUT_BUTTON,
    PLACEHOLDER_CATEGORY,
    PLACEHOLDER_DESCRIPTION,
    PLACEHOLDER_QUESTION,
    PLACEHOLDER_SEARCH,
    PLACEHOLDER_TITLE,
)
from tryout_app.core.errors import SaveAllError, TryoutAppError
from tryout_app.core.models import Question, QuestionId, TryoutDraft
from tryout_app.core.tryout_manager import TryoutManager
from tryout_app.styling.styles import Styles
from tryout_app.ui.dialog_helpers import (
    check_unsaved_changes,
    confirm_delete_question,
    report_error,
    show_info,
)
from tryout_app.ui.question_renderer import render_statement


class TryoutEditorPanel(QWidget):
    """UI component for tryout settings plus the question sidebar and editor."""

    def __init__(
        self,
        tryout_manager: TryoutManager,
        on_tryout_saved: Callable[[], None],
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self.tryout_manager = tryout_manager
        self.on_tryout_saved = on_tryout_saved
        self._populating = False

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.heading_label = QLabel("Create Tryout", self)
        self.heading_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.heading_label)

        # Tryout settings
        settings_group = QGroupBox("Tryout Settings", self)
        settings_form = QFormLayout()
        settings_group.setLayout(settings_form)

        self.title_input = QLineEdit(self)
        self.title_input.setPlaceholderText(PLACEHOLDER_TITLE)
        settings_form.addRow("Title *", self.title_input)

        self.description_input = QPlainTextEdit(self)
        self.description_input.setPlaceholderText(PLACEHOLDER_DESCRIPTION)
        self.description_input.setMaximumHeight(70)
        settings_form.addRow("Description", self.description_input)

        self.category_input = QLineEdit(self)
        self.category_input.setPlaceholderText(PLACEHOLDER_CATEGORY)
        settings_form.addRow("Category *", self.category_input)

        self.time_limit_spinbox = QSpinBox(self)
        self.time_limit_spinbox.setRange(1, 600)
        self.time_limit_spinbox.setSuffix(" min")
        self.time_limit_spinbox.setValue(DEFAULT_TIME_LIMIT_MINUTES)
        settings_form.addRow("Time limit", self.time_limit_spinbox)

        layout.addWidget(settings_group)

        body_row = QHBoxLayout()

        # Sidebar
        sidebar = QVBoxLayout()
        self.search_input = QLineEdit(self)
        self.search_input.setPlaceholderText(PLACEHOLDER_SEARCH)
        self.search_input.textChanged.connect(lambda _: self._refresh_sidebar())
        sidebar.addWidget(self.search_input)

        self.question_list = QListWidget(self)
        self.question_list.currentItemChanged.connect(self._on_sidebar_selection)
        sidebar.addWidget(self.question_list, stretch=1)

        self.total_points_label = QLabel("", self)
        self.total_points_label.setStyleSheet(Styles.get_muted_label_style())
        sidebar.addWidget(self.total_points_label)

        self.add_button = QPushButton(EDITOR_ADD_BUTTON, self)
        self.add_button.clicked.connect(self._handle_add_question)
        sidebar.addWidget(self.add_button)
        body_row.addLayout(sidebar, stretch=1)

        # Question editor
        editor_column = QVBoxLayout()
        self.question_input = QPlainTextEdit(self)
        self.question_input.setPlaceholderText(PLACEHOLDER_QUESTION)
        self.question_input.textChanged.connect(self._on_question_input_changed)
        editor_column.addWidget(self.question_input)

        answer_row = QHBoxLayout()
        answer_row.addWidget(QLabel("Correct answer:", self))
        self.true_radio = QRadioButton("True", self)
        self.false_radio = QRadioButton("False", self)
        self.answer_group = QButtonGroup(self)
        self.answer_group.addButton(self.true_radio)
        self.answer_group.addButton(self.false_radio)
        self.true_radio.toggled.connect(lambda _: self._on_question_input_changed())
        answer_row.addWidget(self.true_radio)
        answer_row.addWidget(self.false_radio)
        answer_row.addStretch()

        answer_row.addWidget(QLabel("Points:", self))
        self.points_spinbox = QSpinBox(self)
        self.points_spinbox.setRange(1, 100)
        self.points_spinbox.setValue(DEFAULT_QUESTION_POINTS)
        self.points_spinbox.valueChanged.connect(lambda _: self._on_question_input_changed())
        answer_row.addWidget(self.points_spinbox)
        editor_column.addLayout(answer_row)

        self.preview_view = QWebEngineView(self)
        editor_column.addWidget(self.preview_view, stretch=1)

        question_actions = QHBoxLayout()
        self.save_question_button = QPushButton(EDITOR_SAVE_BUTTON, self)
        self.save_question_button.clicked.connect(self._handle_save_question)
        question_actions.addWidget(self.save_question_button)

        self.delete_question_button = QPushButton(EDITOR_DELETE_BUTTON, self)
        self.delete_question_button.clicked.connect(self._handle_delete_question)
        question_actions.addWidget(self.delete_question_button)
        editor_column.addLayout(question_actions)

        body_row.addLayout(editor_column, stretch=3)
        layout.addLayout(body_row, stretch=1)

        # Footer
        footer = QHBoxLayout()
        self.status_label = QLabel(EDITOR_NO_SELECTION, self)
        footer.addWidget(self.status_label, stretch=1)

        self.save_all_button = QPushButton(EDITOR_SAVE_ALL_BUTTON, self)
        self.save_all_button.clicked.connect(self._handle_save_all)
        footer.addWidget(self.save_all_button)

        self.save_tryout_button = QPushButton(EDITOR_SAVE_TRYOUT_BUTTON, self)
        self.save_tryout_button.setProperty("primary", True)
        self.save_tryout_button.clicked.connect(self._handle_save_tryout)
        footer.addWidget(self.save_tryout_button)
        layout.addLayout(footer)

    # --- Loading ---

    def start_new_tryout(self) -> None:
        self.tryout_manager.new_draft()
        self._populate_settings(TryoutDraft())
        self.heading_label.setText("Create Tryout")
        self._refresh_all()
        self.status_label.setText("Add questions, then save the tryout.")

    def open_tryout(self, tryout_id: str) -> bool:
        try:
            tryout = self.tryout_manager.open_tryout(tryout_id)
        except TryoutAppError as exc:
            report_error(self, "Failed to load tryout", exc)
            return False
        self._populate_settings(TryoutDraft.from_tryout(tryout))
        self.heading_label.setText(f"Edit Tryout: {tryout.title}")
        self._refresh_all()
        self.status_label.setText(f"Loaded {len(self.tryout_manager.get_questions())} questions.")
        return True

    def check_unsaved_changes(self) -> bool:
        """Check for unsaved questions and prompt the user. Returns True if ok to proceed."""
        if not self.tryout_manager.check_unsaved_changes():
            return True

        result = check_unsaved_changes(self)
        if result is True:
            return self._handle_save_tryout()
        elif result is False:
            return True
        else:
            return False

    # --- Settings ---

    def _populate_settings(self, draft: TryoutDraft) -> None:
        self.title_input.setText(draft.title)
        self.description_input.setPlainText(draft.description)
        self.category_input.setText(draft.category)
        self.time_limit_spinbox.setValue(draft.time_limit)

    def _build_draft_from_inputs(self) -> TryoutDraft:
        return TryoutDraft(
            title=self.title_input.text(),
            description=self.description_input.toPlainText(),
            category=self.category_input.text(),
            time_limit=int(self.time_limit_spinbox.value()),
        )

    # --- Question editing ---

    def _on_sidebar_selection(self, current: QListWidgetItem | None, _previous: QListWidgetItem | None) -> None:
        if self._populating or current is None:
            return
        question_id: QuestionId = current.data(Qt.UserRole)
        self.tryout_manager.select_question(question_id)
        self._populate_question_fields()

    def _on_question_input_changed(self) -> None:
        if self._populating:
            return
        selected = self.tryout_manager.get_selected_question()
        if selected is None:
            return
        try:
            question = self.tryout_manager.update_question(
                selected.id,
                content=self.question_input.toPlainText(),
                answer=self.true_radio.isChecked(),
                points=int(self.points_spinbox.value()),
            )
        except TryoutAppError as exc:
            report_error(self, "Cannot edit question", exc)
            self._populate_question_fields()
            return
        self._refresh_sidebar()
        self._refresh_preview(question)

    def _handle_add_question(self) -> None:
        question = self.tryout_manager.add_question()
        self._refresh_all()
        self.status_label.setText(f"Added {question.content}.")

    def _handle_save_question(self) -> None:
        selected = self.tryout_manager.get_selected_question()
        if selected is None:
            show_info(self, "No question", EDITOR_NO_SELECTION)
            return
        try:
            self.tryout_manager.save_question(selected.id)
        except TryoutAppError as exc:
            report_error(self, "Failed to save question", exc)
            return
        self._refresh_all()
        self.status_label.setText("Question saved successfully.")

    def _handle_delete_question(self) -> None:
        selected = self.tryout_manager.get_selected_question()
        if selected is None:
            show_info(self, "No question", EDITOR_NO_SELECTION)
            return
        if not selected.id.is_temporary:
            position = self._position_of(selected.id)
            if not confirm_delete_question(self, position):
                return
        try:
            self.tryout_manager.delete_question(selected.id)
        except TryoutAppError as exc:
            report_error(self, "Failed to delete question", exc)
            return
        self._refresh_all()
        self.status_label.setText("Question deleted successfully.")

    def _handle_save_all(self) -> None:
        if not self.tryout_manager.has_open_tryout():
            self._handle_save_tryout()
            return
        try:
            saved = self.tryout_manager.save_all_questions()
        except TryoutAppError as exc:
            report_error(self, "Failed to save all changes", exc)
            self._refresh_all()
            return
        self._refresh_all()
        self.status_label.setText(f"Saved {len(saved)} question(s).")

    def _handle_save_tryout(self) -> bool:
        is_new = not self.tryout_manager.has_open_tryout()
        try:
            tryout = self.tryout_manager.save_tryout(self._build_draft_from_inputs())
        except SaveAllError as exc:
            # The tryout itself exists now; only some questions are still dirty.
            report_error(self, "Some questions were not saved", exc)
            self._refresh_all()
            return False
        except TryoutAppError as exc:
            report_error(self, "Failed to save tryout", exc)
            return False
        self.heading_label.setText(f"Edit Tryout: {tryout.title}")
        self._refresh_all()
        self.status_label.setText("Tryout created successfully!" if is_new else "Tryout updated successfully.")
        self.on_tryout_saved()
        return True

    # --- Rendering ---

    def _refresh_all(self) -> None:
        self._refresh_sidebar()
        self._populate_question_fields()

    def _position_of(self, question_id: QuestionId) -> int:
        questions = self.tryout_manager.get_questions()
        return next((i + 1 for i, q in enumerate(questions) if q.id == question_id), 0)

    def _refresh_sidebar(self) -> None:
        questions = self.tryout_manager.get_questions()
        positions = {q.id: index + 1 for index, q in enumerate(questions)}
        query = self.search_input.text()
        visible = self.tryout_manager.filter_questions(query) if query.strip() else questions
        selected = self.tryout_manager.get_selected_question()

        self._populating = True
        try:
            self.question_list.clear()
            for question in visible:
                first_line = (question.content.splitlines() or [""])[0][:40]
                marker = "* " if question.is_dirty else ""
                text = f"{marker}{positions[question.id]}. {first_line} ({question.points} pt)"
                item = QListWidgetItem(text, self.question_list)
                item.setData(Qt.UserRole, question.id)
                if selected is not None and question.id == selected.id:
                    self.question_list.setCurrentItem(item)
        finally:
            self._populating = False

        total_points = sum(q.points for q in questions)
        self.total_points_label.setText(f"{len(questions)} questions · {total_points} points")

    def _populate_question_fields(self) -> None:
        question = self.tryout_manager.get_selected_question()
        self._populating = True
        try:
            has_selection = question is not None
            for widget in (
                self.question_input,
                self.true_radio,
                self.false_radio,
                self.points_spinbox,
                self.save_question_button,
                self.delete_question_button,
            ):
                widget.setEnabled(has_selection)
            if question is None:
                self.question_input.clear()
                self.true_radio.setChecked(True)
                self.points_spinbox.setValue(DEFAULT_QUESTION_POINTS)
                self.preview_view.setHtml("")
                return
            self.question_input.setPlainText(question.content)
            self.true_radio.setChecked(question.answer)
            self.false_radio.setChecked(not question.answer)
            self.points_spinbox.setValue(question.points)
        finally:
            self._populating = False
        self._refresh_preview(question)

    def _refresh_preview(self, question: Question) -> None:
        questions = self.tryout_manager.get_questions()
        html = render_statement(question, self._position_of(question.id), len(questions), show_answer=True)
        self.preview_view.setHtml(html)
