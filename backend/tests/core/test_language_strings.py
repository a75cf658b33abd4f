"""Language Strings tests — pure data functions for localized failure messages.

Tests cover:
    - Every FailureKind has a message in every Locale
    - INPUT_TOO_LONG includes the configured limit
    - Accept-Language parsing picks the first supported locale
"""

import pytest

from app.core.domain_types import FailureKind, Locale
from app.core.language_strings import get_user_message, parse_accept_language


def test_every_kind_has_message_in_every_locale():
    for locale in Locale:
        for kind in FailureKind:
            message = get_user_message(kind, locale)
            assert isinstance(message, str)
            assert len(message) > 0


def test_input_too_long_includes_limit():
    assert "5000" in get_user_message(FailureKind.INPUT_TOO_LONG, Locale.EN)
    assert "1200" in get_user_message(FailureKind.INPUT_TOO_LONG, Locale.ZH, 1200)


def test_chinese_empty_input_message():
    assert get_user_message(FailureKind.EMPTY_INPUT, Locale.ZH) == "输入文本不能为空"


@pytest.mark.parametrize("header,expected", [
    ("zh-CN,zh;q=0.9,en;q=0.8", Locale.ZH),
    ("en-US,en;q=0.9", Locale.EN),
    ("fr-FR, en;q=0.5", Locale.EN),
    ("fr-FR", Locale.ZH),
    ("", Locale.ZH),
    (None, Locale.ZH),
])
def test_parse_accept_language(header, expected):
    assert parse_accept_language(header, Locale.ZH) == expected
