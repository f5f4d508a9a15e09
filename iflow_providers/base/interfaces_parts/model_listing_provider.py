"""ModelListingProvider Protocol (single-class module).

Interface for providers that advertise the models they can serve.
"""

from __future__ import annotations

from typing import List, Protocol, runtime_checkable

from ..models import ModelInfo


@runtime_checkable
class ModelListingProvider(Protocol):
    """Interface to obtain the models currently usable with this provider."""

    def list_models(self) -> List[ModelInfo]:
        """Return usable models; an empty list when no credential is configured."""
        ...
