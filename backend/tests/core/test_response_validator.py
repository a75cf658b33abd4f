"""Response Validator tests — pure tests for validate().

Tests cover:
    - Valid JSON keeps card order exactly, duplicates included
    - Surrounding whitespace is trimmed before parsing
    - Syntactically invalid JSON (including fenced output, NaN/Infinity and
      runaway nesting) → MALFORMED_JSON
    - Wrong shapes (missing/non-array cards, non-object items, non-string text) → SCHEMA_MISMATCH
    - No length checks; idempotence
"""

import json

import pytest

from app.core.domain_types import Card, CardSet, FailureKind, ValidationFailure
from app.core.response_validator import validate


# --- Accepted -----------------------------------------------------------------

def test_accepts_cards_in_array_order():
    raw = json.dumps({"cards": [{"text": "one"}, {"text": "two"}, {"text": "three"}]})
    result = validate(raw)
    assert isinstance(result, CardSet)
    assert result.texts() == ["one", "two", "three"]


def test_trims_surrounding_whitespace_before_parsing():
    result = validate('  {"cards":[{"text":"a"},{"text":"b"}]}  ')
    assert result == CardSet((Card("a"), Card("b")))


def test_trims_newlines_and_tabs():
    result = validate('\n\t{"cards":[{"text":"a"}]}\n\n')
    assert isinstance(result, CardSet)
    assert result.texts() == ["a"]


def test_duplicate_texts_are_kept():
    result = validate('{"cards":[{"text":"same"},{"text":"same"}]}')
    assert result.texts() == ["same", "same"]


def test_empty_cards_array_is_accepted():
    result = validate('{"cards": []}')
    assert isinstance(result, CardSet)
    assert len(result) == 0


def test_extra_fields_are_ignored():
    result = validate('{"cards":[{"text":"a","style":"bold"}],"title":"x"}')
    assert result.texts() == ["a"]


def test_no_length_limit_on_card_text():
    long_text = "字" * 1000
    result = validate(json.dumps({"cards": [{"text": long_text}]}, ensure_ascii=False))
    assert result.texts() == [long_text]


def test_escaped_quotes_and_backslashes_survive():
    raw = '{"cards":[{"text":"she said \\"hi\\" \\\\ bye"}]}'
    result = validate(raw)
    assert result.texts() == ['she said "hi" \\ bye']


# --- Malformed JSON -----------------------------------------------------------

@pytest.mark.parametrize("raw", [
    "",
    "   ",
    "not json at all",
    '{"cards": [{"text": "a"}',
    "{'cards': [{'text': 'a'}]}",
    'Here you go: {"cards": [{"text": "a"}]}',
    '{"cards": [{"text": "a"}], "score": NaN}',
    '{"cards": [{"text": "a"}], "score": Infinity}',
    '{"cards": [{"text": "a"}], "score": -Infinity}',
])
def test_invalid_json_is_malformed(raw):
    result = validate(raw)
    assert isinstance(result, ValidationFailure)
    assert result.kind == FailureKind.MALFORMED_JSON


def test_code_fences_are_not_stripped():
    raw = '```json\n{"cards": [{"text": "a"}]}\n```'
    result = validate(raw)
    assert isinstance(result, ValidationFailure)
    assert result.kind == FailureKind.MALFORMED_JSON


def test_malformed_json_keeps_original_raw_text():
    raw = "  {broken  "
    result = validate(raw)
    assert result.raw_text == raw


def test_non_standard_constant_is_named_in_reason():
    result = validate('{"cards": [{"text": "a"}], "score": NaN}')
    assert "NaN" in result.reason


def test_deeply_nested_json_is_malformed():
    raw = '{"cards": ' + "[" * 100_000 + "]" * 100_000 + "}"
    result = validate(raw)
    assert isinstance(result, ValidationFailure)
    assert result.kind == FailureKind.MALFORMED_JSON
    assert result.raw_text == raw


# --- Schema mismatch ----------------------------------------------------------

@pytest.mark.parametrize("raw", [
    "[]",
    '"cards"',
    "42",
    "null",
    "{}",
    '{"card": [{"text": "a"}]}',
    '{"cards": null}',
    '{"cards": "a, b"}',
    '{"cards": {"text": "a"}}',
    '{"cards": ["a", "b"]}',
    '{"cards": [{"text": "a"}, null]}',
    '{"cards": [{"content": "a"}]}',
    '{"cards": [{"text": 1}]}',
    '{"cards": [{"text": null}]}',
    '{"cards": [{"text": ["a"]}]}',
    '{"cards": [{"text": "a"}, {"text": false}]}',
])
def test_wrong_shape_is_schema_mismatch(raw):
    result = validate(raw)
    assert isinstance(result, ValidationFailure)
    assert result.kind == FailureKind.SCHEMA_MISMATCH
    assert result.raw_text == raw


def test_schema_mismatch_names_offending_index():
    result = validate('{"cards": [{"text": "ok"}, {"text": 3}]}')
    assert "cards[1]" in result.reason


# --- Purity -------------------------------------------------------------------

@pytest.mark.parametrize("raw", [
    '{"cards":[{"text":"a"}]}',
    "nope",
    '{"cards": 1}',
])
def test_validate_is_idempotent(raw):
    assert validate(raw) == validate(raw)
