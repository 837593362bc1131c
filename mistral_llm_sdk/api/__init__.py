"""
Public API Layer

User-facing classes and functions of the Mistral LLM SDK.
"""

from .client import MistralClient, generate

__all__ = ["MistralClient", "generate"]
