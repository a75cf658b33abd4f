"""Card Prompt — fixed instructions asking the model to polish, segment, and emit JSON.

Invariants:
    - User text is embedded verbatim between two INPUT_DELIMITER lines
    - Instructions always request ONLY {"cards": [{"text": ...}]} with escaped strings
    - The ~100 character per-card target is advisory; nothing downstream enforces it

Design Decisions:
    - One fixed template per locale (ZH is the original audience: Douyin /
      Xiaohongshu posts); instructions precede the delimited content so the model
      cannot read user text as instructions
    - Concatenation over str.format: user text may contain braces
"""

from app.core.domain_types import Locale

INPUT_DELIMITER = '"""'
CARD_SOFT_LIMIT = 100


_INSTRUCTIONS: dict[Locale, str] = {
    Locale.ZH: (
        "请扮演一个社交媒体内容优化助手。我将给你一段文字，请你：\n"
        "1. 将文字润色，使其更适合在抖音图文或小红书笔记中发布，风格简洁、吸引人。\n"
        "2. 将润色后的内容，智能地分割成多个逻辑连贯的小段落，每段适合单独放在一张图片卡片上展示"
        f"（例如每段建议不超过{CARD_SOFT_LIMIT}字，但请根据内容逻辑自然分段）。\n"
        "3. 以严格的JSON格式返回结果，**不要包含任何额外的解释、注释或代码块标记 (如 ```)**，"
        "直接输出JSON对象。格式如下：\n"
        "{\n"
        '  "cards": [\n'
        '    {"text": "第一段润色后的文字..."},\n'
        '    {"text": "第二段润色后的文字..."}\n'
        "  ]\n"
        "}\n"
        "**重要：请确保 JSON 字符串值内部的所有特殊字符（尤其是双引号 \" 和反斜杠 \\）"
        "都已正确转义（例如，使用 \\\" 和 \\\\）。最终输出必须是完全合法的 JSON。**\n"
        "\n"
        "这是用户输入的原始文字："
    ),
    Locale.EN: (
        "Act as a social media content editor. I will give you a passage of text. Please:\n"
        "1. Polish the text so it reads well as a short image post: concise and engaging.\n"
        "2. Split the polished text into logically coherent segments, each suitable for "
        f"its own image card (aim for about {CARD_SOFT_LIMIT} characters per segment, "
        "but follow the natural logic of the content).\n"
        "3. Return the result as strict JSON. **Do not include any explanation, comments "
        "or code fence markers (such as ```)**; output the JSON object directly, in this "
        "format:\n"
        "{\n"
        '  "cards": [\n'
        '    {"text": "First polished segment..."},\n'
        '    {"text": "Second polished segment..."}\n'
        "  ]\n"
        "}\n"
        "**Important: make sure every special character inside JSON string values "
        "(especially double quotes \" and backslashes \\) is escaped (for example "
        "\\\" and \\\\). The final output must be completely valid JSON.**\n"
        "\n"
        "Here is the user's original text:"
    ),
}


def build_card_prompt(text: str, locale: Locale = Locale.ZH) -> str:
    """Embed user text verbatim in the fixed instructions for `locale`."""
    return (
        _INSTRUCTIONS[locale]
        + "\n" + INPUT_DELIMITER + "\n"
        + text
        + "\n" + INPUT_DELIMITER + "\n"
    )
