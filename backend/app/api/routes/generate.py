"""Card Generation Route — POST /api/v1/generate.

Invariants:
    - Body is validated by Pydantic before reaching the handler
    - Success returns {"cards": [...]} in model order
    - Every failed outcome is raised as a CardGenError and rendered by the global
      handler as {"message", "code"} with a non-2xx status
    - Locale: body.locale wins, else detected from text, else settings default

Design Decisions:
    - Thin route: all decisions live in GenerationOrchestrator (ADR: impureim sandwich)
    - Orchestrator built per request from injected client + settings: no shared
      mutable state between concurrent submissions
"""

import logging

from fastapi import APIRouter, Depends

from app.config import Settings, get_settings
from app.core.detect_language import detect_locale
from app.core.domain_types import Locale, Success
from app.core.errors import error_from_outcome
from app.infrastructure.anthropic_client import (
    AnthropicCompletionClient, get_completion_client,
)
from app.schemas.generation import ErrorResponse, GenerateRequest, GenerateResponse
from app.services.generation_orchestrator import GenerationOrchestrator

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/generate", tags=["generate"])


def get_orchestrator(
    client: AnthropicCompletionClient = Depends(get_completion_client),
    settings: Settings = Depends(get_settings),
) -> GenerationOrchestrator:
    return GenerationOrchestrator(client, settings)


def resolve_locale(body: GenerateRequest, default: Locale) -> Locale:
    """Explicit locale, else detected from the submitted text."""
    if body.locale:
        return Locale(body.locale)
    locale, _ = detect_locale(body.text, default)
    return locale


@router.post(
    "",
    response_model=GenerateResponse,
    responses={
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
        502: {"model": ErrorResponse},
        503: {"model": ErrorResponse},
    },
)
async def generate_cards(
    body: GenerateRequest,
    orchestrator: GenerationOrchestrator = Depends(get_orchestrator),
    settings: Settings = Depends(get_settings),
):
    """Polish the submitted text and split it into cards."""
    locale = resolve_locale(body, settings.default_locale)
    outcome = await orchestrator.generate(body.text, locale)
    if isinstance(outcome, Success):
        return GenerateResponse.from_card_set(outcome.card_set)
    raise error_from_outcome(outcome, locale, settings.max_input_chars)
