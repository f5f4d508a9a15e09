"""
Pydantic DTO validating inbound chat options.

Purpose
-------
Hosts pass request options as a loose mapping (``temperature``,
``max_tokens``, ``tools``, optionally ``model``). This DTO validates them
before any translation or network work so out-of-range values fail at the
edge with a ``pydantic.ValidationError``.

Notes
-----
- Unknown keys are ignored; hosts often forward their own bookkeeping.
- ``max_tokens`` overrides the configured output ceiling for one request.
"""

from __future__ import annotations

from typing import Any, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..models_parts.tool_spec import ToolSpec


class ChatOptions(BaseModel):
    """Validated per-request options.

    Attributes:
        model: Optional model override.
        temperature: Sampling temperature within [0.0, 2.0].
        max_tokens: Positive output ceiling override.
        tools: Tool specifications offered to the model.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    model: Optional[str] = Field(default=None, min_length=1)
    temperature: Optional[float] = Field(default=None, ge=0.0, le=2.0)
    max_tokens: Optional[int] = Field(default=None, gt=0, alias="maxTokens")
    tools: List[ToolSpec] = Field(default_factory=list)

    @classmethod
    def coerce(cls, options: "ChatOptions | Mapping[str, Any] | None") -> "ChatOptions":
        """Return ``options`` as a validated instance (``None`` -> defaults)."""
        if options is None:
            return cls()
        if isinstance(options, cls):
            return options
        return cls.model_validate(dict(options))


__all__ = ["ChatOptions"]
