"""HasDefaultModel Protocol (single-class module).

Providers advertising a configured model used when a request names none.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable


@runtime_checkable
class HasDefaultModel(Protocol):
    """Interface for providers resolving requests without a model id."""

    def default_model(self) -> Optional[str]:  # pragma: no cover - trivial
        """Wire model name sent when neither the options nor the model id choose one."""
        return None
