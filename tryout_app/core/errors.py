"""Exception hierarchy shared by the core services and the UI."""

from __future__ import annotations

from tryout_app.core.models import QuestionId


class TryoutAppError(Exception):
    """Base class for every recoverable application error."""


class UpstreamError(TryoutAppError):
    """Raised when the backend answers with a non-2xx status or cannot be reached."""

    def __init__(self, resource: str, operation: str, status_code: int | None = None, detail: str = "") -> None:
        self.resource = resource
        self.operation = operation
        self.status_code = status_code
        self.detail = detail
        reason = f"status {status_code}" if status_code is not None else "no response"
        message = f"Failed to {operation} {resource} ({reason})"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class PersistenceError(TryoutAppError):
    """Raised when saving or deleting a question fails; local state is left as it was."""

    def __init__(self, message: str, question_id: QuestionId | None = None) -> None:
        self.question_id = question_id
        super().__init__(message)


class SaveInProgressError(PersistenceError):
    """Raised when a second save, edit or delete targets a question whose save is still pending."""


class SaveAllError(PersistenceError):
    """Raised by a bulk save in which at least one question failed.

    ``question_id`` and ``position`` name the first failure; ``failed_ids``
    lists every question that is still dirty because its save failed.
    """

    def __init__(
        self,
        question_id: QuestionId,
        position: int,
        saved_count: int,
        cause: Exception,
        failed_ids: list[QuestionId] | None = None,
    ) -> None:
        self.position = position
        self.saved_count = saved_count
        self.cause = cause
        self.failed_ids = failed_ids or [question_id]
        super().__init__(
            f"Question {position} could not be saved ({len(self.failed_ids)} failed, "
            f"{saved_count} saved): {cause}",
            question_id=question_id,
        )


class ConfigurationError(TryoutAppError):
    """Raised when a local precondition is not met, e.g. starting a session without questions."""


class ValidationError(TryoutAppError):
    """Raised when a required field is missing or out of range before a submit."""

    def __init__(self, message: str, field_name: str | None = None) -> None:
        self.field_name = field_name
        super().__init__(message)
