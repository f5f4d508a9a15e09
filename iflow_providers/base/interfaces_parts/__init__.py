"""Interface parts: one Protocol per module, re-exported by ``base.interfaces``."""

from .has_default_model import HasDefaultModel
from .llm_provider import LLMProvider
from .model_listing_provider import ModelListingProvider
from .token_estimator import TokenEstimator

__all__ = [
    "HasDefaultModel",
    "LLMProvider",
    "ModelListingProvider",
    "TokenEstimator",
]
