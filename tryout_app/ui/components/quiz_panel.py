"""Component for taking a tryout: start card, question view and result."""

from __future__ import annotations

from PySide6.QtWebEngineWidgets import QWebEngineView
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QPushButton,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from tryout_app.constants.quiz_constants import FALSE_LABEL, TRUE_LABEL
from tryout_app.constants.ui_constants import (
    QUIZ_FALSE_BUTTON,
    QUIZ_NEXT_BUTTON,
    QUIZ_NO_DESCRIPTION,
    QUIZ_PREV_BUTTON,
    QUIZ_START_BUTTON,
    QUIZ_SUBMIT_BUTTON,
    QUIZ_TRUE_BUTTON,
)
from tryout_app.core.errors import TryoutAppError
from tryout_app.core.tryout_manager import TryoutManager
from tryout_app.styling.styles import Styles
from tryout_app.ui.dialog_helpers import report_error
from tryout_app.ui.question_renderer import render_statement

START_PAGE = 0
QUESTION_PAGE = 1
RESULT_PAGE = 2


class QuizPanel(QWidget):
    """UI component walking one attempt through the QuizSession states."""

    def __init__(self, tryout_manager: TryoutManager, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.tryout_manager = tryout_manager

        self._build_ui()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()
        self.setLayout(layout)

        self.title_label = QLabel("", self)
        self.title_label.setStyleSheet(Styles.get_large_label_style())
        layout.addWidget(self.title_label)

        self.pages = QStackedWidget(self)
        self.pages.addWidget(self._build_start_page())
        self.pages.addWidget(self._build_question_page())
        self.pages.addWidget(self._build_result_page())
        layout.addWidget(self.pages, stretch=1)

    def _build_start_page(self) -> QWidget:
        page = QWidget(self)
        page_layout = QVBoxLayout(page)

        self.description_label = QLabel("", page)
        self.description_label.setWordWrap(True)
        page_layout.addWidget(self.description_label)

        self.summary_label = QLabel("", page)
        self.summary_label.setStyleSheet(Styles.get_muted_label_style())
        page_layout.addWidget(self.summary_label)
        page_layout.addStretch()

        self.start_button = QPushButton(QUIZ_START_BUTTON, page)
        self.start_button.setProperty("primary", True)
        self.start_button.clicked.connect(self._handle_start)
        page_layout.addWidget(self.start_button)
        return page

    def _build_question_page(self) -> QWidget:
        page = QWidget(self)
        page_layout = QHBoxLayout(page)

        self.jump_list = QListWidget(page)
        self.jump_list.setMaximumWidth(160)
        self.jump_list.currentRowChanged.connect(self._handle_jump)
        page_layout.addWidget(self.jump_list)

        column = QVBoxLayout()
        self.progress_label = QLabel("", page)
        self.progress_label.setStyleSheet(Styles.get_muted_label_style())
        column.addWidget(self.progress_label)

        self.statement_view = QWebEngineView(page)
        column.addWidget(self.statement_view, stretch=1)

        answer_row = QHBoxLayout()
        self.true_button = QPushButton(QUIZ_TRUE_BUTTON, page)
        self.true_button.setCheckable(True)
        self.true_button.clicked.connect(lambda: self._handle_answer(TRUE_LABEL))
        answer_row.addWidget(self.true_button)

        self.false_button = QPushButton(QUIZ_FALSE_BUTTON, page)
        self.false_button.setCheckable(True)
        self.false_button.clicked.connect(lambda: self._handle_answer(FALSE_LABEL))
        answer_row.addWidget(self.false_button)
        column.addLayout(answer_row)

        nav_row = QHBoxLayout()
        self.prev_button = QPushButton(QUIZ_PREV_BUTTON, page)
        self.prev_button.clicked.connect(self._handle_previous)
        nav_row.addWidget(self.prev_button)
        nav_row.addStretch()

        self.next_button = QPushButton(QUIZ_NEXT_BUTTON, page)
        self.next_button.clicked.connect(self._handle_next)
        nav_row.addWidget(self.next_button)

        self.submit_button = QPushButton(QUIZ_SUBMIT_BUTTON, page)
        self.submit_button.setProperty("primary", True)
        self.submit_button.clicked.connect(self._handle_submit)
        nav_row.addWidget(self.submit_button)
        column.addLayout(nav_row)

        page_layout.addLayout(column, stretch=1)
        return page

    def _build_result_page(self) -> QWidget:
        page = QWidget(self)
        page_layout = QVBoxLayout(page)
        page_layout.addStretch()

        self.score_label = QLabel("", page)
        page_layout.addWidget(self.score_label)

        self.result_detail_label = QLabel("", page)
        self.result_detail_label.setStyleSheet(Styles.get_muted_label_style())
        page_layout.addWidget(self.result_detail_label)
        page_layout.addStretch()

        self.retake_button = QPushButton("Take Again", page)
        self.retake_button.clicked.connect(self._handle_start)
        page_layout.addWidget(self.retake_button)
        return page

    # --- Loading ---

    def open_tryout(self, tryout_id: str) -> bool:
        try:
            tryout = self.tryout_manager.open_tryout(tryout_id)
            summary = self.tryout_manager.get_summary()
        except TryoutAppError as exc:
            report_error(self, "Failed to load tryout", exc)
            return False

        self.title_label.setText(tryout.title)
        self.description_label.setText(tryout.description or QUIZ_NO_DESCRIPTION)
        self.summary_label.setText(
            f"{summary.question_count} questions  ·  {summary.total_points} points  ·  "
            f"{summary.time_limit} minutes  ·  ~{summary.average_minutes_per_question} min per question"
        )
        self.start_button.setEnabled(summary.question_count > 0)
        self.pages.setCurrentIndex(START_PAGE)
        return True

    def abandon(self) -> None:
        self.tryout_manager.abandon_quiz()
        self.pages.setCurrentIndex(START_PAGE)

    # --- Handlers ---

    def _handle_start(self) -> None:
        try:
            session = self.tryout_manager.start_quiz()
        except TryoutAppError as exc:
            report_error(self, "Cannot start tryout", exc)
            return

        self.jump_list.blockSignals(True)
        self.jump_list.clear()
        for index in range(session.question_count):
            self.jump_list.addItem(f"Question {index + 1}")
        self.jump_list.blockSignals(False)

        self.pages.setCurrentIndex(QUESTION_PAGE)
        self._refresh_question_view()

    def _handle_answer(self, label: str) -> None:
        self.tryout_manager.answer_current_question(label)
        self._refresh_question_view()

    def _handle_next(self) -> None:
        if self.tryout_manager.move_to_next_question():
            self._refresh_question_view()

    def _handle_previous(self) -> None:
        if self.tryout_manager.move_to_previous_question():
            self._refresh_question_view()

    def _handle_jump(self, row: int) -> None:
        if row >= 0 and self.tryout_manager.go_to_question(row):
            self._refresh_question_view()

    def _handle_submit(self) -> None:
        score = self.tryout_manager.submit_quiz()
        if score is None:
            return
        session = self.tryout_manager.session
        total = session.total_points
        passed = total > 0 and score * 2 >= total
        self.score_label.setText(f"Score: {score} / {total}")
        self.score_label.setStyleSheet(Styles.get_score_label_style(passed))
        elapsed = session.elapsed_seconds() or 0.0
        minutes, seconds = divmod(int(elapsed), 60)
        self.result_detail_label.setText(
            f"Answered {session.answered_count} of {session.question_count} questions in {minutes}m {seconds:02d}s"
        )
        self.pages.setCurrentIndex(RESULT_PAGE)

    # --- Rendering ---

    def _refresh_question_view(self) -> None:
        session = self.tryout_manager.session
        question = session.current_question
        if question is None:
            return

        position = session.position
        selection = session.selection_for(question.id)
        self.statement_view.setHtml(render_statement(question, position + 1, session.question_count))
        self.progress_label.setText(
            f"Question {position + 1} of {session.question_count}  ·  {session.answered_count} answered"
        )
        self.true_button.setChecked(TRUE_LABEL in selection)
        self.false_button.setChecked(FALSE_LABEL in selection)

        self.jump_list.blockSignals(True)
        self.jump_list.setCurrentRow(position)
        for index in range(self.jump_list.count()):
            item = self.jump_list.item(index)
            prefix = "✓ " if session.is_answered(session.question_at(index).id) else ""
            item.setText(f"{prefix}Question {index + 1}")
        self.jump_list.blockSignals(False)

        self.prev_button.setEnabled(position > 0)
        self.next_button.setVisible(not session.is_on_last_question())
        self.next_button.setEnabled(session.can_go_next())
        self.submit_button.setVisible(session.is_on_last_question())
        self.submit_button.setEnabled(session.can_submit())
