"""Provider adapter registry."""

from typing import Type

from .base import ProviderAdapter
from ..errors import ValidationError

_ADAPTERS: dict[str, Type[ProviderAdapter]] = {}


def _ensure_adapters_loaded():
    """Import all adapter modules to trigger registration."""
    from . import fal  # noqa: F401
    from . import gemini  # noqa: F401
    from . import replicate  # noqa: F401


def register(provider: str):
    """Decorator to register an adapter for a provider tag."""
    def decorator(cls):
        _ADAPTERS[provider] = cls
        return cls
    return decorator


def get_adapter_class(provider: str) -> Type[ProviderAdapter]:
    """Get adapter class by provider tag."""
    _ensure_adapters_loaded()
    if provider not in _ADAPTERS:
        raise ValidationError(f"Unknown provider: {provider}. Use one of: {', '.join(list_providers())}")
    return _ADAPTERS[provider]


def list_providers() -> list[str]:
    """List all registered provider tags."""
    _ensure_adapters_loaded()
    return sorted(_ADAPTERS)


__all__ = [
    "ProviderAdapter",
    "register",
    "get_adapter_class",
    "list_providers",
]
