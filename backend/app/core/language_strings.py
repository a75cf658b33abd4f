"""Language Strings — centralized user-facing failure messages per locale.

Invariants:
    - All strings are pure data (no IO, no computation beyond lookup)
    - Every FailureKind has a message in every Locale
    - Messages never contain model output or internal details

Design Decisions:
    - One dict per locale keyed by FailureKind: adding a locale is a single block
    - Chinese strings follow the wording the product shipped with
"""

from app.core.domain_types import FailureKind, Locale


_USER_MESSAGES: dict[Locale, dict[FailureKind, str]] = {
    Locale.EN: {
        FailureKind.EMPTY_INPUT: "Input text cannot be empty.",
        FailureKind.INPUT_TOO_LONG: (
            "Input text is too long. Please keep it within {limit} characters."
        ),
        FailureKind.UNEXPECTED_RESPONSE_SHAPE: (
            "The AI service returned an unexpected response. Please try again."
        ),
        FailureKind.MALFORMED_JSON: (
            "Could not interpret the AI response. Please try again later "
            "or adjust your input."
        ),
        FailureKind.SCHEMA_MISMATCH: (
            "Could not interpret the AI response. Please try again later "
            "or adjust your input."
        ),
        FailureKind.AUTH_ERROR: "The AI service API key is invalid or missing.",
        FailureKind.RATE_LIMITED: (
            "The AI service is receiving too many requests. Please try again later."
        ),
        FailureKind.UPSTREAM_ERROR: "An error occurred while calling the AI service.",
        FailureKind.INVALID_REQUEST: "Invalid request format.",
        FailureKind.INTERNAL_ERROR: "An unexpected error occurred.",
    },
    Locale.ZH: {
        FailureKind.EMPTY_INPUT: "输入文本不能为空",
        FailureKind.INPUT_TOO_LONG: "输入文本过长，请保持在 {limit} 字以内",
        FailureKind.UNEXPECTED_RESPONSE_SHAPE: "AI服务返回了意外的响应格式，请稍后重试",
        FailureKind.MALFORMED_JSON: "无法解析AI模型的响应，请稍后重试或调整输入。",
        FailureKind.SCHEMA_MISMATCH: "无法解析AI模型的响应，请稍后重试或调整输入。",
        FailureKind.AUTH_ERROR: "Anthropic API 密钥无效或缺失",
        FailureKind.RATE_LIMITED: "AI服务调用频率过高，请稍后再试",
        FailureKind.UPSTREAM_ERROR: "调用AI服务时发生错误",
        FailureKind.INVALID_REQUEST: "无效的请求格式",
        FailureKind.INTERNAL_ERROR: "发生未知错误，请稍后重试",
    },
}

DEFAULT_INPUT_LIMIT = 5000


def get_user_message(
    kind: FailureKind, locale: Locale, limit: int = DEFAULT_INPUT_LIMIT,
) -> str:
    """Localized, user-safe message for a failure kind."""
    return _USER_MESSAGES[locale][kind].format(limit=limit)


def parse_accept_language(header: str | None, default: Locale) -> Locale:
    """Pick the first supported locale from an Accept-Language header."""
    if not header:
        return default
    for part in header.split(","):
        tag = part.split(";")[0].strip().lower()
        if tag.startswith("zh"):
            return Locale.ZH
        if tag.startswith("en"):
            return Locale.EN
    return default
