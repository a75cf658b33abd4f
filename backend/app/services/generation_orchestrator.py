"""Generation Orchestrator — one submission, one model call, one validation pass.

Invariants:
    - EMPTY_INPUT / INPUT_TOO_LONG are decided before any outbound call
    - Length is counted in characters, not bytes
    - Exactly one create_completion() call per accepted input; no retries here
    - Only content[0] is used, and only when its type is "text"
    - Every failure becomes a GenerationOutcome variant; nothing is swallowed
    - Raw model text rides on ValidationFailure for the API error log; it is
      not logged here and never placed in a user message

Design Decisions:
    - Returns GenerationOutcome instead of raising: the route decides the HTTP
      mapping, tests assert on plain values (ADR: impureim sandwich)
    - Client injected through the constructor: tests pass MockAnthropicClient
"""

import logging
from typing import Protocol

from app.config import Settings
from app.core.domain_types import (
    FailureKind, GenerationOutcome, InputRejected, Locale,
    Success, TransportFailure, ValidationFailure,
)
from app.core.errors import (
    AuthError, ErrorContext, RateLimitedError, UpstreamError,
)
from app.core.prompt_template import build_card_prompt
from app.core.response_validator import validate

logger = logging.getLogger(__name__)


class CompletionClient(Protocol):
    async def create_completion(
        self, *, prompt: str, model: str, max_tokens: int,
        temperature: float, context: ErrorContext | None = None,
    ): ...


class GenerationOrchestrator:
    """Turns raw user text into a CardSet via the model service."""

    def __init__(self, client: CompletionClient, settings: Settings):
        self.client = client
        self.model = settings.card_model
        self.max_tokens = settings.card_max_tokens
        self.temperature = settings.card_temperature
        self.max_input_chars = settings.max_input_chars

    async def generate(
        self, raw_input: str, locale: Locale = Locale.ZH,
    ) -> GenerationOutcome:
        rejected = self.check_input(raw_input)
        if rejected is not None:
            return rejected

        prompt = build_card_prompt(raw_input, locale)
        logger.info(
            "Sending card generation request",
            extra={"input_chars": len(raw_input), "locale": locale.value},
        )
        try:
            message = await self.client.create_completion(
                prompt=prompt,
                model=self.model,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
                context=ErrorContext(locale=locale),
            )
        except AuthError as e:
            return self._transport_failure(FailureKind.AUTH_ERROR, e)
        except RateLimitedError as e:
            return self._transport_failure(FailureKind.RATE_LIMITED, e)
        except UpstreamError as e:
            return self._transport_failure(FailureKind.UPSTREAM_ERROR, e)

        text = extract_text(message)
        if text is None:
            logger.error(
                "Unexpected response structure from model",
                extra={"error_code": FailureKind.UNEXPECTED_RESPONSE_SHAPE.value},
            )
            return ValidationFailure(
                FailureKind.UNEXPECTED_RESPONSE_SHAPE,
                "First content block is missing or not text",
                repr(getattr(message, "content", None)),
            )

        result = validate(text)
        if isinstance(result, ValidationFailure):
            logger.error(
                f"Could not parse model response: {result.reason}",
                extra={"error_code": result.kind.value},
            )
            return result

        logger.info(
            "Parsed model response", extra={"card_count": len(result)},
        )
        return Success(result)

    def check_input(self, raw_input: str) -> InputRejected | None:
        """Local input checks. Never touches the network."""
        if not raw_input.strip():
            return InputRejected(FailureKind.EMPTY_INPUT, "Input text is empty")
        if len(raw_input) > self.max_input_chars:
            return InputRejected(
                FailureKind.INPUT_TOO_LONG,
                f"Input has {len(raw_input)} characters "
                f"(limit {self.max_input_chars})",
                length=len(raw_input),
            )
        return None

    def _transport_failure(self, kind: FailureKind, e) -> TransportFailure:
        logger.error(
            f"Model call failed: {e.message}",
            extra={"error_code": kind.value, "status_code": e.context.status_code},
        )
        return TransportFailure(
            kind,
            e.message,
            status_code=e.context.status_code,
            retry_after_ms=e.context.retry_after_ms,
        )


def extract_text(message) -> str | None:
    """Text of the first content block, or None when the shape is unexpected."""
    content = getattr(message, "content", None)
    if not content:
        return None
    first = content[0]
    if getattr(first, "type", None) != "text":
        return None
    text = getattr(first, "text", None)
    return text if isinstance(text, str) else None
