"""Providers package."""

from hanitv.providers.base import Provider
from hanitv.providers.hanime import HanimeProvider

__all__ = [
    "Provider",
    "HanimeProvider",
    "get_provider",
    "get_all_providers",
]

# Provider registry for easy access
PROVIDERS: dict[str, Provider] = {}


def get_provider(name: str) -> Provider | None:
    """Get a provider by name."""
    return PROVIDERS.get(name.lower())


def get_all_providers() -> list[Provider]:
    """Get all registered providers."""
    return list(PROVIDERS.values())


def register_providers():
    """Register all available providers."""
    global PROVIDERS
    PROVIDERS = {
        "hanime": HanimeProvider(),
    }


# Auto-register on import
register_providers()
