"""Provider Factory utilities.

Purpose
-------
Create provider adapters by canonical name. Adapters are imported lazily
with ``importlib`` so importing the base layer never pulls in adapter
modules (and their transports) as a side effect.

Failure semantics
-----------------
No retries or fallbacks: the factory returns an instance or raises
:class:`UnknownProviderError` naming what went wrong.
"""

from __future__ import annotations

from importlib import import_module
from typing import Any, Dict, Tuple


class UnknownProviderError(Exception):
    """Raised when a provider cannot be resolved or initialized."""


class ProviderFactory:
    """Create provider adapters based on a canonical name (e.g., ``"iflow"``)."""

    _PROVIDERS: Dict[str, Tuple[str, str]] = {
        "iflow": ("iflow_providers.iflow.client", "IFlowProvider"),
    }

    @classmethod
    def supported(cls) -> Tuple[str, ...]:
        return tuple(sorted(cls._PROVIDERS))

    @classmethod
    def create(cls, provider: str, **kwargs: Any) -> Any:
        """Instantiate the adapter registered under ``provider``.

        Keyword arguments are forwarded to the adapter constructor.
        """
        key = (provider or "").lower().strip()
        if key not in cls._PROVIDERS:
            raise UnknownProviderError(
                f"Unknown provider '{provider}'. Supported: {', '.join(cls.supported())}"
            )
        module_path, class_name = cls._PROVIDERS[key]
        try:
            module = import_module(module_path)
        except ImportError as e:
            raise UnknownProviderError(f"Failed to import adapter module '{module_path}': {e}") from e
        adapter_cls = getattr(module, class_name, None)
        if adapter_cls is None:
            raise UnknownProviderError(f"Adapter class '{class_name}' not found in '{module_path}'")
        try:
            return adapter_cls(**kwargs)
        except TypeError as e:
            raise UnknownProviderError(f"Failed to initialize provider '{key}': {e}") from e


def create_provider(provider: str, **kwargs: Any) -> Any:
    """Shortcut for :meth:`ProviderFactory.create`."""
    return ProviderFactory.create(provider, **kwargs)


__all__ = ["ProviderFactory", "UnknownProviderError", "create_provider"]
