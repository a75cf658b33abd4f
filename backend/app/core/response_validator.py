"""Response Validator — strict "parse or fail" conversion of model text to a CardSet.

Invariants:
    - Only surrounding whitespace is removed before parsing (no fence stripping,
      no bracket scraping)
    - A CardSet is returned only when every element of `cards` is an object with
      a str `text`; any other shape is a ValidationFailure, never a partial CardSet
    - Card order equals array order
    - NaN/Infinity literals and nesting past the recursion limit are MALFORMED_JSON
    - No length or content checks: structural contract only
    - Pure: same input, same output, no hidden state

Design Decisions:
    - Returns a value (CardSet | ValidationFailure) instead of raising: callers map
      outcomes, tests need no network (ADR: functional core)
    - raw_text kept on the failure for operator logs
"""

import json

from app.core.domain_types import Card, CardSet, FailureKind, ValidationFailure


def validate(raw_text: str) -> CardSet | ValidationFailure:
    """Parse raw model text into a CardSet, or classify why it cannot be."""
    candidate = raw_text.strip()

    try:
        parsed = json.loads(candidate, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        return ValidationFailure(
            FailureKind.MALFORMED_JSON,
            f"Invalid JSON at line {e.lineno} column {e.colno}: {e.msg}",
            raw_text,
        )
    except ValueError as e:
        return ValidationFailure(FailureKind.MALFORMED_JSON, str(e), raw_text)
    except RecursionError:
        return ValidationFailure(
            FailureKind.MALFORMED_JSON, "JSON nesting too deep", raw_text,
        )

    problem = _schema_problem(parsed)
    if problem is not None:
        return ValidationFailure(FailureKind.SCHEMA_MISMATCH, problem, raw_text)

    return CardSet(tuple(Card(text=item["text"]) for item in parsed["cards"]))


def _reject_constant(name: str) -> float:
    """NaN and Infinity are not JSON, even though the json module allows them."""
    raise ValueError(f"Non-standard JSON constant {name}")


def _schema_problem(parsed: object) -> str | None:
    """Describe the first structural mismatch, or None if the shape is valid."""
    if not isinstance(parsed, dict):
        return f"Top-level value is {type(parsed).__name__}, expected object"
    if "cards" not in parsed:
        return "Missing 'cards' field"
    cards = parsed["cards"]
    if not isinstance(cards, list):
        return f"'cards' is {type(cards).__name__}, expected array"
    for index, item in enumerate(cards):
        if not isinstance(item, dict):
            return f"cards[{index}] is {type(item).__name__}, expected object"
        if not isinstance(item.get("text"), str):
            return f"cards[{index}].text is not a string"
    return None
