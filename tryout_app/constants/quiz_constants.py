"""Tryout-related constants shared across UI and core layers."""

DEFAULT_TIME_LIMIT_MINUTES: int = 30
DEFAULT_QUESTION_ANSWER: bool = True
DEFAULT_QUESTION_POINTS: int = 1
DEFAULT_QUESTION_CONTENT_TEMPLATE: str = "Question {number}"
TRUE_LABEL: str = "true"
FALSE_LABEL: str = "false"
