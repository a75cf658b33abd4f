"""Domain Types — cards, card sets, and the tagged generation outcome.

Invariants:
    - CardSet preserves display order; duplicate card texts are allowed
    - Card and CardSet are frozen: built once by the validator, never mutated
    - GenerationOutcome is a closed union: Success | InputRejected |
      ValidationFailure | TransportFailure
    - All failure classifications encoded as FailureKind, no raw string matching

Design Decisions:
    - Frozen dataclasses over Pydantic models: core stays free of IO/validation
      frameworks, schemas/ owns the wire shape (ADR: impureim sandwich)
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class Locale(str, Enum):
    """Supported locales for prompts and user-facing messages."""
    EN = "en"
    ZH = "zh"


class FailureKind(str, Enum):
    """Every way a generation request can fail."""
    EMPTY_INPUT = "EMPTY_INPUT"
    INPUT_TOO_LONG = "INPUT_TOO_LONG"
    UNEXPECTED_RESPONSE_SHAPE = "UNEXPECTED_RESPONSE_SHAPE"
    MALFORMED_JSON = "MALFORMED_JSON"
    SCHEMA_MISMATCH = "SCHEMA_MISMATCH"
    AUTH_ERROR = "AUTH_ERROR"
    RATE_LIMITED = "RATE_LIMITED"
    UPSTREAM_ERROR = "UPSTREAM_ERROR"
    # Boundary-only kinds (never produced by the orchestrator)
    INVALID_REQUEST = "INVALID_REQUEST"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# ─── Cards ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class Card:
    """One segment of polished text, rendered as one image."""
    text: str


@dataclass(frozen=True)
class CardSet:
    """Ordered cards from one successful generation."""
    cards: tuple[Card, ...]

    def texts(self) -> list[str]:
        return [card.text for card in self.cards]

    def __len__(self) -> int:
        return len(self.cards)


# ─── Outcomes ────────────────────────────────────────────────────

@dataclass(frozen=True)
class Success:
    card_set: CardSet


@dataclass(frozen=True)
class InputRejected:
    """Input failed local checks; the model service was never called."""
    kind: FailureKind
    reason: str
    length: int = 0


@dataclass(frozen=True)
class ValidationFailure:
    """Model text could not be turned into a CardSet.

    raw_text is for operator diagnostics only, never for end users.
    """
    kind: FailureKind
    reason: str
    raw_text: str


@dataclass(frozen=True)
class TransportFailure:
    """The model call itself failed (auth, rate limit, upstream)."""
    kind: FailureKind
    reason: str
    status_code: int | None = None
    retry_after_ms: int | None = None


GenerationOutcome = Success | InputRejected | ValidationFailure | TransportFailure
