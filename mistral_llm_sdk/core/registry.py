from typing import Dict, Optional
import os
from ..models.generation import ModelConfig
from ..config.constants import API_KEY_ENV_VAR
from ..config.models import MODEL_CONFIGS as RAW_MODEL_CONFIGS, DEFAULT_MODEL
from .normalization.usage import calculate_usage_cost


# Convert raw configs to Pydantic models
MODEL_CONFIGS: Dict[str, ModelConfig] = {
    k: ModelConfig(**v) for k, v in RAW_MODEL_CONFIGS.items()
}


def get_config(llm_model_id: str) -> ModelConfig:
    """Get configuration for a specific model."""
    return MODEL_CONFIGS.get(llm_model_id, MODEL_CONFIGS[DEFAULT_MODEL])


def get_available_models() -> Dict[str, ModelConfig]:
    """Get all available models that are enabled."""
    return {k: v for k, v in MODEL_CONFIGS.items() if v.enabled}


def is_model_available(llm_model_id: str) -> bool:
    """Check if a model is known, enabled and an API key is configured."""
    config = MODEL_CONFIGS.get(llm_model_id)
    return config is not None and config.enabled and bool(os.getenv(API_KEY_ENV_VAR))


def calculate_cost(usage: Dict[str, int], config: ModelConfig) -> Optional[float]:
    """Calculate cost based on usage and model configuration."""
    if config.input_cost_per_1k_tokens is None or config.output_cost_per_1k_tokens is None:
        return None
    return calculate_usage_cost(
        usage,
        config.input_cost_per_1k_tokens,
        config.output_cost_per_1k_tokens
    )
