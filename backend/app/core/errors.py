"""Error Hierarchy — typed, categorized exceptions for every generation failure.

Invariants:
    - Every error has a kind (FailureKind), category (ErrorCategory),
      severity (ErrorSeverity) and http_status
    - Input errors are 400-level; model/upstream errors are 5xx
    - to_response() carries only the localized user message and the code,
      never model output, stack traces or SDK messages
    - error_from_outcome() is total over the failure variants of GenerationOutcome

Design Decisions:
    - Single hierarchy with CardGenError base: FastAPI global handler catches all
      (ADR: uniform error shape)
    - Operator detail (message) kept separate from user_message: diagnostics go to
      logs, users get a short localized sentence
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone

from app.core.domain_types import (
    FailureKind, InputRejected, Locale, TransportFailure, ValidationFailure,
)
from app.core.language_strings import DEFAULT_INPUT_LIMIT, get_user_message


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    MODEL_RESPONSE = "model_response"
    CONFIGURATION = "configuration"
    EXTERNAL_API = "external_api"
    INTERNAL = "internal"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    locale: Locale = Locale.EN
    status_code: int | None = None
    retry_after_ms: int | None = None
    raw_text: str | None = None


class CardGenError(Exception):
    """Base exception for all card generation errors."""

    def __init__(
        self,
        message: str,
        kind: FailureKind,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
        user_message: str | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.kind = kind
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status
        self.user_message = user_message or get_user_message(
            kind, self.context.locale,
        )

    @property
    def code(self) -> str:
        return self.kind.value

    def to_response(self) -> dict:
        """Convert to the public failure envelope."""
        return {"message": self.user_message, "code": self.code}


# ─── Input Errors (400-level) ────────────────────────────────────

class EmptyInputError(CardGenError):
    """Submitted text is empty or whitespace-only."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Input text is empty", FailureKind.EMPTY_INPUT,
            ErrorCategory.VALIDATION, ErrorSeverity.WARNING, context, 400,
        )


class InputTooLongError(CardGenError):
    """Submitted text exceeds the character limit."""
    def __init__(
        self, length: int, limit: int = DEFAULT_INPUT_LIMIT,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        super().__init__(
            f"Input text has {length} characters (limit {limit})",
            FailureKind.INPUT_TOO_LONG, ErrorCategory.VALIDATION,
            ErrorSeverity.WARNING, ctx, 400,
            user_message=get_user_message(
                FailureKind.INPUT_TOO_LONG, ctx.locale, limit,
            ),
        )
        self.length = length
        self.limit = limit


# ─── Model Response Errors (502) ─────────────────────────────────

class UnexpectedResponseShapeError(CardGenError):
    """Model reply has no leading text block."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, FailureKind.UNEXPECTED_RESPONSE_SHAPE,
            ErrorCategory.MODEL_RESPONSE, ErrorSeverity.ERROR, context, 502,
        )


class MalformedJsonError(CardGenError):
    """Model text is not valid JSON."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, FailureKind.MALFORMED_JSON,
            ErrorCategory.MODEL_RESPONSE, ErrorSeverity.ERROR, context, 502,
        )


class SchemaMismatchError(CardGenError):
    """Model JSON does not match {"cards": [{"text": str}, ...]}."""
    def __init__(self, message: str, context: ErrorContext | None = None):
        super().__init__(
            message, FailureKind.SCHEMA_MISMATCH,
            ErrorCategory.MODEL_RESPONSE, ErrorSeverity.ERROR, context, 502,
        )


# ─── Transport Errors ────────────────────────────────────────────

class AuthError(CardGenError):
    """Model service credential is missing or rejected (401)."""
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        super().__init__(
            message, FailureKind.AUTH_ERROR, ErrorCategory.CONFIGURATION,
            ErrorSeverity.CRITICAL, ctx, 500,
        )


class RateLimitedError(CardGenError):
    """Model service rejected the call with 429."""
    def __init__(
        self,
        message: str,
        retry_after_ms: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.status_code = 429
        ctx.retry_after_ms = retry_after_ms
        super().__init__(
            message, FailureKind.RATE_LIMITED, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.WARNING, ctx, 503,
        )


class UpstreamError(CardGenError):
    """Any other model service failure (5xx, 4xx, connection, timeout)."""
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        ctx = context or ErrorContext()
        ctx.status_code = status_code
        super().__init__(
            message, FailureKind.UPSTREAM_ERROR, ErrorCategory.EXTERNAL_API,
            ErrorSeverity.CRITICAL, ctx, 502,
        )


TransportError = AuthError | RateLimitedError | UpstreamError

_VALIDATION_ERRORS: dict[FailureKind, type[CardGenError]] = {
    FailureKind.UNEXPECTED_RESPONSE_SHAPE: UnexpectedResponseShapeError,
    FailureKind.MALFORMED_JSON: MalformedJsonError,
    FailureKind.SCHEMA_MISMATCH: SchemaMismatchError,
}


def error_from_outcome(
    outcome: InputRejected | ValidationFailure | TransportFailure,
    locale: Locale,
    input_limit: int = DEFAULT_INPUT_LIMIT,
) -> CardGenError:
    """Map a failed GenerationOutcome onto the exception the API raises."""
    ctx = ErrorContext(locale=locale)
    match outcome:
        case InputRejected(kind=FailureKind.EMPTY_INPUT):
            return EmptyInputError(ctx)
        case InputRejected(kind=FailureKind.INPUT_TOO_LONG, length=length):
            return InputTooLongError(length, input_limit, ctx)
        case ValidationFailure(kind=kind, reason=reason, raw_text=raw_text):
            ctx.raw_text = raw_text
            return _VALIDATION_ERRORS[kind](reason, ctx)
        case TransportFailure(kind=FailureKind.AUTH_ERROR, reason=reason):
            return AuthError(reason, outcome.status_code, ctx)
        case TransportFailure(
            kind=FailureKind.RATE_LIMITED, reason=reason,
            retry_after_ms=retry_after_ms,
        ):
            return RateLimitedError(reason, retry_after_ms, ctx)
        case TransportFailure(reason=reason, status_code=status_code):
            return UpstreamError(reason, status_code, ctx)
    raise ValueError(f"Unmapped outcome: {outcome!r}")
