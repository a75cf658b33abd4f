"""Anthropic Completion Client — wraps AsyncAnthropic with error mapping and optional retry.

Invariants:
    - Missing credential: AuthError raised before any network call
    - 401 → AuthError, 429 → RateLimitedError, everything else → UpstreamError
    - SDK-level retries disabled: with max_retries=0 exactly one request is sent
    - With max_retries > 0, only 429 / 5xx / connection failures are retried,
      using exponential backoff with jitter and Retry-After when present
    - Non-retryable 4xx and any other SDK APIError fail immediately

Design Decisions:
    - Wrapper over raw client: isolates transport concerns from the orchestrator
      (ADR: single responsibility)
    - ±25% jitter on backoff, Retry-After takes precedence when present
"""

import asyncio
import random
import logging
from dataclasses import replace

import anthropic
from anthropic import (
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    RateLimitError,
)

from app.config import Settings, get_settings
from app.core.errors import (
    AuthError, ErrorContext, RateLimitedError, TransportError, UpstreamError,
)

logger = logging.getLogger(__name__)

_RETRYABLE_STATUS_FLOOR = 500


class AnthropicCompletionClient:
    """Single-prompt completion calls against the Messages API."""

    def __init__(
        self,
        api_key: str | None,
        base_url: str | None = None,
        max_retries: int = 0,
        base_delay_ms: int = 1000,
        max_delay_ms: int = 60_000,
        timeout_seconds: float = 120.0,
    ):
        self.api_key = api_key
        self.client = None
        if api_key:
            self.client = anthropic.AsyncAnthropic(
                api_key=api_key,
                base_url=base_url,
                timeout=timeout_seconds,
                max_retries=0,
            )
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self.max_delay_ms = max_delay_ms

    @property
    def configured(self) -> bool:
        return self.client is not None

    async def create_completion(
        self,
        *,
        prompt: str,
        model: str,
        max_tokens: int,
        temperature: float,
        context: ErrorContext | None = None,
    ):
        """Send one user prompt and return the SDK Message.

        Raises AuthError, RateLimitedError or UpstreamError.
        """
        if self.client is None:
            raise AuthError(
                "Anthropic API key is not configured", context=context,
            )

        for attempt in range(self.max_retries + 1):
            # Fresh context per attempt: a stale Retry-After must not leak forward
            ctx = replace(context) if context else ErrorContext()
            try:
                response = await self.client.messages.create(
                    model=model,
                    max_tokens=max_tokens,
                    temperature=temperature,
                    messages=[{"role": "user", "content": prompt}],
                )
                self._log_success(response, attempt)
                return response

            except AuthenticationError as e:
                raise AuthError(
                    f"Anthropic rejected the API key: {e}", 401, ctx,
                )

            except RateLimitError as e:
                error = RateLimitedError(
                    "Rate limit exceeded",
                    retry_after_ms=self._extract_retry_after(e),
                    context=ctx,
                )
                await self._retry_or_raise(error, attempt)

            except APITimeoutError:
                error = UpstreamError("API timeout", context=ctx)
                await self._retry_or_raise(error, attempt)

            except APIConnectionError as e:
                error = UpstreamError(f"Connection error: {e}", context=ctx)
                await self._retry_or_raise(error, attempt)

            except APIStatusError as e:
                error = self._map_status_error(e, ctx)
                if e.status_code >= _RETRYABLE_STATUS_FLOOR:
                    await self._retry_or_raise(error, attempt)
                else:
                    raise error

            except anthropic.APIError as e:
                # e.g. APIResponseValidationError: a reply the SDK could not read
                raise UpstreamError(str(e), context=ctx)

    def _map_status_error(
        self, e: APIStatusError, context: ErrorContext | None,
    ) -> TransportError:
        """Classify a status error by HTTP code alone."""
        if e.status_code == 401:
            return AuthError(
                f"Anthropic rejected the API key: {e}", 401, context,
            )
        if e.status_code == 429:
            return RateLimitedError(
                "Rate limit exceeded",
                retry_after_ms=self._extract_retry_after(e),
                context=context,
            )
        return UpstreamError(str(e), status_code=e.status_code, context=context)

    async def _retry_or_raise(self, error: TransportError, attempt: int) -> None:
        """Sleep before the next attempt, or raise once retries are exhausted."""
        if attempt >= self.max_retries:
            raise error
        delay = error.context.retry_after_ms or self._backoff(attempt)
        logger.warning(
            f"{error.code}, retry after {delay}ms (attempt {attempt + 1})",
            extra={"error_code": error.code, "attempt": attempt + 1},
        )
        await asyncio.sleep(delay / 1000)

    def _log_success(self, response, attempt: int) -> None:
        """Log successful API call with token usage."""
        usage = response.usage
        logger.info(
            "Anthropic API success",
            extra={
                "attempt": attempt + 1,
                "input_tokens": usage.input_tokens,
                "output_tokens": usage.output_tokens,
            },
        )

    def _backoff(self, attempt: int) -> int:
        """Exponential backoff with ±25% jitter."""
        delay = min(self.max_delay_ms, (2 ** attempt) * self.base_delay_ms)
        return int(delay * random.uniform(0.75, 1.25))  # nosec B311

    def _extract_retry_after(self, error: APIStatusError) -> int | None:
        """Extract Retry-After header (returns milliseconds)."""
        response = getattr(error, "response", None)
        if response is None:
            return None
        val = response.headers.get("retry-after")
        if not val:
            return None
        try:
            return int(float(val) * 1000)
        except ValueError:
            return None


# Singleton (initialized on startup)
completion_client: AnthropicCompletionClient | None = None


def init_client(settings: Settings) -> AnthropicCompletionClient:
    global completion_client
    completion_client = AnthropicCompletionClient(
        settings.anthropic_api_key,
        base_url=settings.anthropic_base_url,
        max_retries=settings.anthropic_max_retries,
        base_delay_ms=settings.anthropic_base_delay_ms,
        max_delay_ms=settings.anthropic_max_delay_ms,
        timeout_seconds=settings.anthropic_timeout_seconds,
    )
    return completion_client


def get_completion_client() -> AnthropicCompletionClient:
    """FastAPI dependency for the model client."""
    if completion_client is None:
        return init_client(get_settings())
    return completion_client
