"""
Domain exceptions.

Every error here is recoverable by the user: the caller re-prompts for input
and prior state stays untouched.
"""


class DroidPlanError(Exception):
    """Base class for all DroidPlan errors"""

    message_key = "error.generic"

    @property
    def user_message(self) -> str:
        """Literal user-facing message for this error kind"""
        from droidplan.i18n import tr
        return tr(self.message_key)


class TaskValidationError(DroidPlanError):
    """Task form input rejected by the validation service"""


class EmptyFieldsError(TaskValidationError):
    message_key = "validation.empty_fields"


class InvalidTimestampError(TaskValidationError):
    message_key = "validation.invalid_timestamp"


class InvertedWindowError(TaskValidationError):
    message_key = "validation.inverted_window"


class DeadlineExceededError(TaskValidationError):
    message_key = "validation.deadline_exceeded"


class ExpenseLockedError(DroidPlanError):
    """Raised when deleting a confirmed (locked) expense"""
    message_key = "expense.locked"


class TaskNotFoundError(DroidPlanError):
    message_key = "task.not_found"


class ExpenseNotFoundError(DroidPlanError):
    message_key = "expense.not_found"
