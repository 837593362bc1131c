"""HTTP endpoints for Mistral LLM SDK."""

from .api import router

__all__ = ["router"]
