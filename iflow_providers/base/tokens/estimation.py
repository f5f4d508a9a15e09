"""Approximate token counting.

``estimate_tokens`` is a coarse length heuristic, not a tokenizer: one token
per four characters, rounded up. Hosts use it to budget prompts against the
model's input limit; real counts come from the vendor's ``usage`` block
(see ``base.tokens.usage``).

For messages only text parts count. Image parts contribute nothing because
their cost is not a function of character length.
"""

from __future__ import annotations

import math
from typing import Union

from ...config.defaults import CHARS_PER_TOKEN_ESTIMATE
from ..models_parts.message import Message


def estimate_text_tokens(text: str) -> int:
    """Return ``ceil(len(text) / 4)``; empty text costs zero tokens."""
    if not text:
        return 0
    return math.ceil(len(text) / CHARS_PER_TOKEN_ESTIMATE)


def estimate_tokens(value: Union[str, Message]) -> int:
    """Estimate the token cost of a string or of a message's text parts."""
    if isinstance(value, Message):
        return estimate_text_tokens("".join(value.text_parts()))
    return estimate_text_tokens(str(value))


__all__ = ["estimate_tokens", "estimate_text_tokens"]
