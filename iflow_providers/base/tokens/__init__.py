"""Token estimation and usage helpers package."""

from .estimation import estimate_tokens, estimate_text_tokens
from .usage import CanonicalUsage, PLACEHOLDER_USAGE, normalize_usage

__all__ = [
    "estimate_tokens",
    "estimate_text_tokens",
    "CanonicalUsage",
    "PLACEHOLDER_USAGE",
    "normalize_usage",
]
