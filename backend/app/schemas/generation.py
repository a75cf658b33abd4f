"""Generation Schemas — Pydantic models for the card generation endpoint.

Invariants:
    - GenerateRequest.text must be a JSON string; emptiness and length are checked
      by the orchestrator so they map to EMPTY_INPUT / INPUT_TOO_LONG
    - GenerateResponse mirrors {"cards": [{"text": str}, ...]} in order
    - ErrorResponse is the only failure body: {"message", "code"}

Design Decisions:
    - StrictStr for text: a number or list must be INVALID_REQUEST, not coerced
    - Literal locale over free string: Pydantic rejects unknown locales natively
"""

from typing import Literal

from pydantic import BaseModel, StrictStr

from app.core.domain_types import CardSet


class GenerateRequest(BaseModel):
    """User submission: raw text plus optional locale override."""
    text: StrictStr
    locale: Literal["en", "zh"] | None = None


class CardOut(BaseModel):
    text: str


class GenerateResponse(BaseModel):
    """Ordered cards for the presentation layer."""
    cards: list[CardOut]

    @classmethod
    def from_card_set(cls, card_set: CardSet) -> "GenerateResponse":
        return cls(cards=[CardOut(text=card.text) for card in card_set.cards])


class ErrorResponse(BaseModel):
    message: str
    code: str
