"""Token usage normalization.

Converts the vendor ``usage`` block reported on the final stream chunk into
the canonical mapping used in structured logs and response metadata::

    {"prompt": <int|None>, "completion": <int|None>, "total": <int|None>}

Missing or invalid values become ``None``. When ``total`` is absent but both
components are present it is derived as their sum. The helper never raises.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

CanonicalUsage = Dict[str, Optional[int]]

PLACEHOLDER_USAGE: CanonicalUsage = {"prompt": None, "completion": None, "total": None}


def _coerce_int(value: Any) -> Optional[int]:
    """Coerce to a non-negative ``int`` or ``None`` (booleans rejected)."""
    if value is None or isinstance(value, bool):
        return None
    try:
        iv = int(value)
    except (TypeError, ValueError):
        return None
    return iv if iv >= 0 else None


def normalize_usage(usage: Optional[Mapping[str, Any]]) -> CanonicalUsage:
    """Map an OpenAI-style usage mapping to the canonical shape."""
    if not isinstance(usage, Mapping):
        return PLACEHOLDER_USAGE.copy()
    prompt = _coerce_int(usage.get("prompt_tokens"))
    completion = _coerce_int(usage.get("completion_tokens"))
    total = _coerce_int(usage.get("total_tokens"))
    if total is None and prompt is not None and completion is not None:
        total = prompt + completion
    return {"prompt": prompt, "completion": completion, "total": total}


__all__ = ["CanonicalUsage", "PLACEHOLDER_USAGE", "normalize_usage"]
