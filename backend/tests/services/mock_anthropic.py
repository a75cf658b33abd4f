"""Mock Anthropic Client — stands in for AnthropicCompletionClient in service and route tests.

Invariants:
    - _Block / _Message mirror the attributes the orchestrator reads (type, text,
      content, usage)
    - MockAnthropicClient sequences responses (one per create_completion call);
      an Exception in the sequence is raised instead of returned
    - calls records every create_completion kwargs dict

Design Decisions:
    - Flat mock classes (no inheritance): simple, explicit, easy to debug
    - Builders return _Message objects so tests read like the API they replace
"""

import json


# -- Mock Anthropic SDK objects ------------------------------------------------


class _Block:
    """Mock content block (text, tool_use, ...)."""

    def __init__(self, **kwargs):
        self._data = kwargs
        for k, v in kwargs.items():
            setattr(self, k, v)

    def __repr__(self):
        return f"_Block({self._data})"


class _Usage:
    """Mock token usage."""

    def __init__(self, input_tokens=100, output_tokens=50):
        self.input_tokens = input_tokens
        self.output_tokens = output_tokens


class _Message:
    """Mock Message returned by messages.create()."""

    def __init__(
        self, content, stop_reason="end_turn", input_tokens=100, output_tokens=50,
    ):
        self.content = content
        self.stop_reason = stop_reason
        self.usage = _Usage(input_tokens, output_tokens)


class MockAnthropicClient:
    """Replaces AnthropicCompletionClient. Sequences pre-configured responses."""

    def __init__(self, responses, configured=True):
        self._responses = responses
        self._idx = 0
        self.calls = []
        self.configured = configured

    async def create_completion(self, **kwargs):
        self.calls.append(kwargs)
        if self._idx >= len(self._responses):
            raise RuntimeError(
                f"MockAnthropicClient: no response at index {self._idx} "
                f"(configured {len(self._responses)})",
            )
        response = self._responses[self._idx]
        self._idx += 1
        if isinstance(response, Exception):
            raise response
        return response


# -- Builder helpers -----------------------------------------------------------


def text_response(text, tokens=(100, 50)):
    """Build a single text-block message."""
    return _Message([_Block(type="text", text=text)], "end_turn", *tokens)


def cards_response(*texts):
    """Build a well-formed {"cards": [...]} text message."""
    payload = {"cards": [{"text": t} for t in texts]}
    return text_response(json.dumps(payload, ensure_ascii=False))


def tool_use_response(name="lookup", tool_input=None):
    """Build a message whose first block is tool_use, not text."""
    return _Message(
        [_Block(type="tool_use", id=f"toolu_{name}_test", name=name, input=tool_input or {})],
        "tool_use",
    )


def empty_response():
    """Build a message with no content blocks."""
    return _Message([])
