"""Normalization layer for the Mistral request/response lifecycle.

This layer handles:
- Conversation shape and ordering rules
- Parameter validation and defaults
- Usage data normalization
"""

from .messages import normalize_messages
from .params import build_params, form_parameters, validate_parameters
from .usage import normalize_usage

__all__ = [
    "normalize_messages",
    "build_params",
    "form_parameters",
    "validate_parameters",
    "normalize_usage",
]
