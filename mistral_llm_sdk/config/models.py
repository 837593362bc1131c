# Model configurations using family inheritance
from .model_families import create_model_config

MODEL_CONFIGS = {
    # Premier models
    "mistral-large-latest": create_model_config("premier", "mistral-large-latest", {
        "display_name": "Mistral Large",
        "description": "Top-tier reasoning model for complex tasks",
        "max_tokens": 8192,
        "context_length": 131000,
        "input_cost_per_1k_tokens": 0.002,
        "output_cost_per_1k_tokens": 0.006,
    }),

    "pixtral-large-latest": create_model_config("premier", "pixtral-large-latest", {
        "display_name": "Pixtral Large",
        "description": "Frontier-class multimodal model with image understanding",
        "max_tokens": 8192,
        "context_length": 131000,
        "input_cost_per_1k_tokens": 0.002,
        "output_cost_per_1k_tokens": 0.006,
    }),

    "mistral-saba-latest": create_model_config("premier", "mistral-saba-latest", {
        "display_name": "Mistral Saba",
        "description": "Model tuned for languages from the Middle East and South Asia",
        "max_tokens": 8192,
        "context_length": 32000,
        "input_cost_per_1k_tokens": 0.0002,
        "output_cost_per_1k_tokens": 0.0006,
    }),

    "codestral-latest": create_model_config("premier", "codestral-latest", {
        "display_name": "Codestral",
        "description": "Cutting-edge model for code generation and fill-in-the-middle",
        "max_tokens": 8192,
        "context_length": 256000,
        "input_cost_per_1k_tokens": 0.0003,
        "output_cost_per_1k_tokens": 0.0009,
    }),

    "ministral-8b-latest": create_model_config("premier", "ministral-8b-latest", {
        "display_name": "Ministral 8B",
        "description": "Powerful edge model with high performance/price ratio",
        "max_tokens": 4096,
        "context_length": 131000,
        "input_cost_per_1k_tokens": 0.0001,
        "output_cost_per_1k_tokens": 0.0001,
    }),

    "ministral-3b-latest": create_model_config("premier", "ministral-3b-latest", {
        "display_name": "Ministral 3B",
        "description": "Smallest edge model, lowest latency",
        "max_tokens": 4096,
        "context_length": 131000,
        "input_cost_per_1k_tokens": 0.00004,
        "output_cost_per_1k_tokens": 0.00004,
    }),

    # Free models, latest
    "mistral-small-latest": create_model_config("free", "mistral-small-latest", {
        "display_name": "Mistral Small",
        "description": "Fast, cost-effective model with vision and tool use",
        "max_tokens": 8192,
        "context_length": 32000,
    }),

    "pixtral-12b-2409": create_model_config("free", "pixtral-12b-2409", {
        "display_name": "Pixtral 12B",
        "description": "12B multimodal model with image understanding",
        "max_tokens": 4096,
        "context_length": 131000,
        "input_cost_per_1k_tokens": 0.00015,
        "output_cost_per_1k_tokens": 0.00015,
    }),

    # Free models, research
    "open-mistral-nemo": create_model_config("research", "open-mistral-nemo", {
        "display_name": "Mistral Nemo",
        "description": "Multilingual open model built with NVIDIA",
        "max_tokens": 4096,
        "context_length": 131000,
    }),

    "open-codestral-mamba": create_model_config("research", "open-codestral-mamba", {
        "display_name": "Codestral Mamba",
        "description": "Mamba-architecture open code model",
        "max_tokens": 4096,
        "context_length": 256000,
    }),
}

# Order matters: it is the order of the schema's model choices
MODEL_CHOICES = list(MODEL_CONFIGS.keys())

DEFAULT_MODEL = "mistral-small-latest"
