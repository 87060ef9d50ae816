"""Factory for creating Business Data Service backends."""

from typing import Any

from .base import BusinessDataService


def create_business_data(
    backend: str = "memory",
    **kwargs: Any
) -> BusinessDataService:
    """Create a Business Data Service backend.

    Args:
        backend: Backend type (only "memory" is available)
        **kwargs: Backend-specific configuration
            For memory:
                - orders, products, transactions: optional seed records

    Returns:
        BusinessDataService instance

    Raises:
        ValueError: If backend type is not supported
    """
    if backend == "memory":
        from .in_memory import InMemoryBusinessData
        return InMemoryBusinessData(**kwargs)

    raise ValueError(
        f"Unsupported business data backend: {backend}. "
        f"Supported backends: memory"
    )
