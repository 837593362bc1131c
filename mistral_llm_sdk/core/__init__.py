"""Core layer: normalization and model registry."""

from .registry import get_config, get_available_models, is_model_available, calculate_cost

__all__ = [
    "get_config",
    "get_available_models",
    "is_model_available",
    "calculate_cost",
]
