"""Errors raised by the crackwatch search client.

A search fails in exactly one of four ways: bad input (``ValidationError``),
no usable connection (``NetworkError``), an answer we cannot read
(``ProtocolError``) or an explicit "Bad request" (``RemoteRejectionError``).
Each kind shows the user one fixed sentence; the cause goes to the logs
through ``technical_details``.
"""

import time
from collections import Counter, deque
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import structlog

log = structlog.stdlib.get_logger()

GAMES_PAGE_URL = "https://crackwatch.com/games"

MSG_UNREACHABLE = "crackwatch.com could not be reached."
MSG_UNHANDLED_RESPONSE = (
    "We received a response from crackwatch.com we weren't expecting, and"
    " couldn't handle. Sorry about that. Perhaps try it directly from"
    f" <{GAMES_PAGE_URL}> until we fix this issue?"
)
MSG_BAD_REQUEST = 'Received a "Bad request" response from crackwatch.com.'
MSG_UNEXPECTED = "An unexpected error occurred. Please try again."


class ErrorCategory(Enum):
    VALIDATION = "validation"
    NETWORK = "network"
    PROTOCOL = "protocol"
    REMOTE_REJECTION = "remote_rejection"
    UNEXPECTED = "unexpected"


class ErrorSeverity(Enum):
    WARNING = "warning"
    ERROR = "error"


@dataclass(frozen=True)
class ErrorContext:
    """Where an error was handled, for errors that arrive without one."""
    operation: str
    component: str
    details: dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UserFriendlyError:
    """What the front end needs to tell the user about a failure."""
    message: str
    category: ErrorCategory
    severity: ErrorSeverity
    suggested_actions: list[str]
    technical_details: str | None = None
    recoverable: bool = True


def _describe(error: BaseException | None) -> str | None:
    if error is None:
        return None
    return f"{type(error).__name__}: {error}"


def _join_details(*parts: str | None) -> str | None:
    present = [part for part in parts if part]
    return "\n".join(present) if present else None


class AppError(Exception):
    """Base class for every failure the client reports to the user.

    Subclasses set the class attributes; instances may override any of them.
    """

    category = ErrorCategory.UNEXPECTED
    severity = ErrorSeverity.ERROR
    default_actions: tuple[str, ...] = ()
    recoverable = True

    def __init__(
        self,
        message: str,
        category: ErrorCategory | None = None,
        severity: ErrorSeverity | None = None,
        suggested_actions: list[str] | None = None,
        technical_details: str | None = None,
        recoverable: bool | None = None,
        context: ErrorContext | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if category is not None:
            self.category = category
        if severity is not None:
            self.severity = severity
        if recoverable is not None:
            self.recoverable = recoverable
        self.suggested_actions = list(
            suggested_actions if suggested_actions is not None else self.default_actions
        )
        self.technical_details = technical_details
        self.context = context

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
    """Caller input broke a precondition. Raised before any network I/O."""

    category = ErrorCategory.VALIDATION
    severity = ErrorSeverity.WARNING
    default_actions = ("Search terms are at most 100 characters; pages start at 1",)

    def __init__(self, message: str, field: str | None = None, value: Any = None) -> None:
        super().__init__(
            message,
            technical_details=_join_details(
                f"Field: {field}" if field else None,
                # Terms can be arbitrarily long
                f"Value: {str(value)[:100]}" if value is not None else None,
            ),
        )
        self.field = field
        self.value = value


class NetworkError(AppError):
    """The service could not be reached, or the connection broke mid-exchange."""

    category = ErrorCategory.NETWORK
    default_actions = ("Check your internet connection", "Try again in a few moments")

    def __init__(
        self,
        original_error: BaseException | None = None,
        endpoint: str | None = None,
        stage: str | None = None,
    ) -> None:
        super().__init__(
            MSG_UNREACHABLE,
            technical_details=_join_details(
                f"Endpoint: {endpoint}" if endpoint else None,
                f"Stage: {stage}" if stage else None,
                _describe(original_error),
            ),
        )
        self.original_error = original_error
        self.endpoint = endpoint
        self.stage = stage


class ProtocolError(AppError):
    """A result frame arrived that could not be decoded into a result set."""

    category = ErrorCategory.PROTOCOL
    default_actions = (f"Search directly on {GAMES_PAGE_URL}",)
    # Retrying gets the same frame back
    recoverable = False

    def __init__(
        self,
        original_error: BaseException | None = None,
        frame: str | None = None,
    ) -> None:
        super().__init__(
            MSG_UNHANDLED_RESPONSE,
            technical_details=_join_details(
                _describe(original_error),
                f"Frame: {frame[:500]}" if frame is not None else None,
            ),
        )
        self.original_error = original_error
        self.frame = frame


class RemoteRejectionError(AppError):
    """The service understood the query and answered "Bad request"."""

    category = ErrorCategory.REMOTE_REJECTION
    severity = ErrorSeverity.WARNING
    default_actions = ("Try a different search term",)

    def __init__(self, term: str | None = None) -> None:
        super().__init__(
            MSG_BAD_REQUEST,
            technical_details=f"Term: {term}" if term is not None else None,
        )
        self.term = term


class ErrorHandlingService:
    """Turns exceptions into user-facing messages and keeps a short history."""

    def __init__(self, max_history_size: int = 100) -> None:
        self._history: deque[tuple[float, AppError]] = deque(maxlen=max_history_size)

    def handle_error(
        self,
        error: Exception,
        operation: str,
        component: str,
        context: dict[str, Any] | None = None,
    ) -> UserFriendlyError:
        """Log ``error`` with its technical details and return what the user sees.

        Exceptions outside the ``AppError`` hierarchy are reported as a
        generic unexpected error.
        """
        if isinstance(error, AppError):
            app_error = error
        else:
            app_error = AppError(
                MSG_UNEXPECTED,
                technical_details=_describe(error),
                context=ErrorContext(operation, component, context or {}),
            )

        emit = log.warning if app_error.severity is ErrorSeverity.WARNING else log.error
        emit(
            "Error occurred",
            error_message=app_error.message,
            category=app_error.category.value,
            severity=app_error.severity.value,
            operation=operation,
            component=component,
            technical_details=app_error.technical_details,
            recoverable=app_error.recoverable,
            context=context,
        )

        self._history.append((time.time(), app_error))
        return app_error.to_user_friendly()

    def get_recent_errors(self, count: int = 10) -> list[AppError]:
        """The last ``count`` handled errors, oldest first."""
        return [error for _, error in list(self._history)[-count:]]

    def get_error_count_by_category(self) -> dict[ErrorCategory, int]:
        return dict(Counter(error.category for _, error in self._history))

    def create_user_message(
        self,
        error: UserFriendlyError,
        include_suggestions: bool = False,
    ) -> str:
        """Render the short text shown to the user, optionally with up to three suggestions."""
        lines = [error.message]
        if include_suggestions and error.suggested_actions:
            lines.append("\nSuggested actions:")
            lines.extend(f"  • {action}" for action in error.suggested_actions[:3])
        return "\n".join(lines)


_error_service: ErrorHandlingService | None = None


def get_error_service() -> ErrorHandlingService:
    """Process-wide error handling service."""
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
