"""TokenEstimator Protocol (single-class module)."""

from __future__ import annotations

from typing import Protocol, Union, runtime_checkable

from ..models import Message


@runtime_checkable
class TokenEstimator(Protocol):
    """Approximate token counting for prompt budgeting (not a tokenizer)."""

    def estimate_tokens(self, value: Union[str, Message]) -> int:
        ...
