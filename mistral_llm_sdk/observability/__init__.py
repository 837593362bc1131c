"""Observability layer.

Structured logging for provider requests, token usage and
message normalisation.
"""

from .logging import ProviderLogger

__all__ = [
    "ProviderLogger",
]
