# Model family base configurations
from typing import Dict, Any

MODEL_FAMILIES = {
    "premier": {
        "provider": "mistral",
        "temperature": 0.0,
        "enabled": True,
    },
    "free": {
        "provider": "mistral",
        "temperature": 0.0,
        "enabled": True,
        "input_cost_per_1k_tokens": 0.0001,
        "output_cost_per_1k_tokens": 0.0003,
    },
    "research": {
        "provider": "mistral",
        "temperature": 0.0,
        "enabled": True,
        "input_cost_per_1k_tokens": 0.00015,
        "output_cost_per_1k_tokens": 0.00015,
    },
}

def create_model_config(family: str, variant: str, overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Create a model configuration by combining family defaults with variant overrides."""
    if family not in MODEL_FAMILIES:
        raise ValueError(f"Unknown model family: {family}")

    base = MODEL_FAMILIES[family].copy()
    base.update(overrides)

    if "name" not in base:
        base["name"] = variant
    if "display_name" not in base:
        base["display_name"] = variant.replace("-", " ").title()
    if "llm_model_id" not in base:
        base["llm_model_id"] = variant

    return base
