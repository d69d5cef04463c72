"""Error types and the error handling service.

Model code raises ``ValidationError`` for values that break a rule and
``FormatError`` for progress text that is not a number. Storage problems are
wrapped in ``PersistenceError`` by the data manager, which reports them through
return values instead of raising. ``ErrorHandlingService`` turns any of these
(or a plain exception) into a message the console can show, and logs the
technical details.
"""

import json
from collections import Counter, deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

log = structlog.stdlib.get_logger()


class ErrorCategory(Enum):
    VALIDATION = "validation"
    FORMAT = "format"
    PERSISTENCE = "persistence"
    CONFIGURATION = "configuration"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


@dataclass(frozen=True)
class UserFriendlyError:
    """What the console shows for a failed operation."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str] = field(default_factory=list)
    technical_details: str | None = None
    recoverable: bool = True


def _details(**parts: Any) -> str | None:
    """Join the non-empty parts as ``Key: value`` lines."""
    lines = [
        f"{name.replace('_', ' ').capitalize()}: {str(value)[:100]}"
        for name, value in parts.items()
        if value is not None and value != ""
    ]
    return "\n".join(lines) or None


class AppError(Exception):
    """Base class for errors the application knows how to explain."""

    category = ErrorCategory.UNEXPECTED
    severity = ErrorSeverity.ERROR

    def __init__(
        self,
        message: str,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool = True,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.suggested_actions = suggested_actions or []
        self.technical_details = technical_details
        self.recoverable = recoverable

    def to_user_friendly(self) -> UserFriendlyError:
        return UserFriendlyError(
            message=self.message,
            category=self.category,
            severity=self.severity,
            suggested_actions=list(self.suggested_actions),
            technical_details=self.technical_details,
            recoverable=self.recoverable,
        )


class ValidationError(AppError):
    """A value breaks a rule of a game, the catalog or a profile."""

    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: Any = None,
        constraints: list[str] | None = None,
    ) -> None:
        self.field = field
        self.value = value
        self.constraints = constraints or []
        super().__init__(
            message,
            suggested_actions=["Please enter a value in the valid range"]
            + [f"Ensure: {constraint}" for constraint in self.constraints],
            technical_details=_details(field=field, value=value),
        )


class FormatError(AppError):
    """Text that should hold a number does not."""

    category = ErrorCategory.FORMAT
    severity = ErrorSeverity.WARNING

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        self.field = field
        self.value = value
        super().__init__(
            message,
            suggested_actions=["Please enter a whole number"],
            technical_details=_details(field=field, value=value),
        )


class PersistenceError(AppError):
    """A saved record could not be written, read or deleted."""

    category = ErrorCategory.PERSISTENCE

    def __init__(
        self,
        message: str,
        original_error: Exception | None = None,
        path: str | None = None,
        operation: str | None = None,
    ) -> None:
        self.original_error = original_error
        self.path = path
        self.operation = operation
        cause = f"{type(original_error).__name__}: {original_error}" if original_error else None
        super().__init__(
            message,
            suggested_actions=self._actions_for(original_error),
            technical_details=_details(path=path, cause=cause),
        )

    @staticmethod
    def _actions_for(error: Exception | None) -> list[str]:
        if isinstance(error, PermissionError):
            return ["Check the permissions of the data directory", "Choose a different data directory"]
        if isinstance(error, FileNotFoundError):
            return ["Verify the data directory is correct", "Save the collection to create the file"]
        if isinstance(error, (ValueError, KeyError, TypeError, AppError)):
            return ["The saved data may be corrupted", "Delete all data to start over"]
        if isinstance(error, OSError) and "space" in str(error).lower():
            return ["Free up disk space", "Choose a different data directory"]
        return ["Check that the data directory exists and is writable"]


class ConfigurationError(AppError):
    """The configuration being saved is invalid."""

    category = ErrorCategory.CONFIGURATION

    def __init__(
        self,
        message: str,
        setting: str | None = None,
        current_value: Any = None,
        expected: str | None = None,
    ) -> None:
        self.setting = setting
        self.current_value = current_value
        self.expected = expected
        actions = ["Check the configuration file", "Delete it to fall back to the defaults"]
        if expected:
            actions.append(f"Expected: {expected}")
        super().__init__(
            message,
            suggested_actions=actions,
            technical_details=_details(setting=setting, current=current_value),
        )


def _wrap(error: Exception, operation: str, context: dict[str, Any]) -> AppError:
    """Classify a plain exception as one of the application's errors."""
    path = context.get("path")
    if isinstance(error, PermissionError):
        return PersistenceError("Permission denied while accessing saved data.", error, path, operation)
    if isinstance(error, FileNotFoundError):
        return PersistenceError("The file or directory was not found.", error, path, operation)
    if isinstance(error, OSError):
        return PersistenceError(f"A file system error occurred: {error}", error, path, operation)
    if isinstance(error, json.JSONDecodeError):
        return PersistenceError("Saved data could not be read. The file may be corrupted.", error, path, operation)
    if isinstance(error, (ValueError, TypeError)):
        return ValidationError(str(error), field=context.get("field"), value=context.get("value"))

    return AppError(
        "An unexpected error occurred. Please try again.",
        technical_details=f"{type(error).__name__}: {error}",
    )


class ErrorHandlingService:
    """Explains errors to the user and keeps a short history of them."""

    def __init__(self, max_history_size: int = 100) -> None:
        self._history: deque[AppError] = deque(maxlen=max_history_size)

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Classify, log and record ``error``.

        Args:
            error: The exception that occurred
            operation: What was being done, e.g. ``"save"``
            component: Where it happened, e.g. ``"data_manager"``
            context: Extra details such as ``path`` or ``field``

        Returns:
            The user-facing description of the error
        """
        app_error = error if isinstance(error, AppError) else _wrap(error, operation, context or {})

        log_method = log.warning if app_error.severity is ErrorSeverity.WARNING else log.error
        log_method(
            "Error occurred",
            error_message=app_error.message,
            category=app_error.category.value,
            severity=app_error.severity.value,
            operation=operation,
            component=component,
            technical_details=app_error.technical_details,
            context=context,
        )

        self._history.append(app_error)
        return app_error.to_user_friendly()

    def get_recent_errors(self, count: int = 10) -> list[AppError]:
        """The ``count`` most recent errors, oldest first."""
        return list(self._history)[-count:]

    def get_error_count_by_category(self) -> dict[ErrorCategory, int]:
        return dict(Counter(error.category for error in self._history))

    def create_user_message(self, error: UserFriendlyError, include_suggestions: bool = True) -> str:
        """Format ``error`` for the console, with up to three suggestions."""
        if not include_suggestions or not error.suggested_actions:
            return error.message
        bullets = "\n".join(f"  • {action}" for action in error.suggested_actions[:3])
        return f"{error.message}\n\nSuggested actions:\n{bullets}"


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """The shared error handling service."""
    global _error_service
    if _error_service is None:
        _error_service = ErrorHandlingService()
    return _error_service


def handle_error(
    error: Exception,
    operation: str,
    component: str,
    context: dict[str, Any] | None = None,
) -> UserFriendlyError:
    return get_error_service().handle_error(error, operation, component, context)
