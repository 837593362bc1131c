"""
Mistral adapter metadata.

Connection details and static adapter description. Pricing and model
catalogue live in mistral_llm_sdk/config/models.py.
"""

ADAPTER_NAME = "mistral"
FORMATTED_NAME = "Mistral"

# Chat roles as the API expects them
ROLES = {
    "llm": "assistant",
    "user": "user",
    "tool": "tool",
}

ADAPTER_OPTS = {
    "stream": True,
    "tools": True,
}

FEATURES = {
    "text": True,
    "tokens": True,
    "vision": True,
}

MISTRAL_BASE_URL = "https://api.mistral.ai/v1"
MISTRAL_CHAT_URL = f"{MISTRAL_BASE_URL}/chat/completions"

# Placeholder name -> environment variable holding its value
ENV = {
    "api_key": "MISTRAL_API_KEY",
}

# ${name} placeholders are rendered from ENV
HEADERS = {
    "Authorization": "Bearer ${api_key}",
    "Content-Type": "application/json",
}

# Environment variables
API_KEY_ENV_VAR = ENV["api_key"]
MODEL_ENV_VAR = "MISTRAL_MODEL"
TIMEOUT_ENV_VAR = "MISTRAL_TIMEOUT"
BASE_URL_ENV_VAR = "MISTRAL_BASE_URL"

DEFAULT_TIMEOUT_SECONDS = 60.0
