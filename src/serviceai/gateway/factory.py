from typing import Any

from .base import ModelGateway
from .live import LiveGateway


def create_gateway(provider: str, **config: Any) -> ModelGateway:
    """Create a text model gateway.

    This factory function hides the instantiation logic for different providers.

    Args:
        provider: Provider type (only 'gemini' is supported)
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str (required)
                - model: str (default: 'gemini-2.5-flash')
                - system_instruction: str | None

    Returns:
        Initialized gateway instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing

    Examples:
        >>> gateway = create_gateway(
        ...     "gemini",
        ...     api_key="...",
        ...     model="gemini-2.5-flash"
        ... )
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        if "api_key" not in config:
            raise TypeError("Gemini gateway requires 'api_key' in config")
        from .providers import GeminiGateway
        return GeminiGateway(**config)

    raise ValueError(
        f"Unsupported provider: {provider}. "
        f"Supported providers: 'gemini'"
    )


def create_live_gateway(provider: str, **config: Any) -> LiveGateway:
    """Create a live (voice) gateway.

    Args:
        provider: Provider type (only 'gemini' is supported)
        **config: Provider-specific configuration
            For Gemini:
                - api_key: str (required)

    Returns:
        Initialized live gateway instance

    Raises:
        ValueError: If provider type is not supported
        TypeError: If required configuration is missing
    """
    provider_lower = provider.lower()

    if provider_lower == "gemini":
        if "api_key" not in config:
            raise TypeError("Gemini live gateway requires 'api_key' in config")
        from .providers import GeminiLiveGateway
        return GeminiLiveGateway(**config)

    raise ValueError(
        f"Unsupported live provider: {provider}. "
        f"Supported providers: 'gemini'"
    )
