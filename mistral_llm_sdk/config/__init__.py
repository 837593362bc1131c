"""Configuration module for Mistral LLM SDK."""

from .models import (
    MODEL_CONFIGS,
    MODEL_CHOICES,
    DEFAULT_MODEL,
)
from .schema import SCHEMA, SchemaField, get_schema, resolve_default

# Import all constants
from .constants import *

__all__ = [
    "MODEL_CONFIGS",
    "MODEL_CHOICES",
    "DEFAULT_MODEL",
    "SCHEMA",
    "SchemaField",
    "get_schema",
    "resolve_default",
]
