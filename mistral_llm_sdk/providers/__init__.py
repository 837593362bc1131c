"""Provider adapters."""

from .base import ProviderAdapter, ProviderError
from .mistral.adapter import MistralProvider

__all__ = [
    "ProviderAdapter",
    "ProviderError",
    "MistralProvider",
]
