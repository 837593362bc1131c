"""
Mistral LLM SDK - chat-completion adapter for the Mistral API.

Features:
- Conversation normalization (Mistral rejects a user turn directly after a tool turn)
- Schema-driven parameter forming with validation
- Streaming and non-streaming generation with usage and tool calls
- Error classification and retry
"""

__version__ = "0.1.0"

from .api.client import MistralClient, generate
from .config.schema import SCHEMA, SchemaField, get_schema
from .core.normalization import (
    build_params,
    form_parameters,
    normalize_messages,
    normalize_usage,
)
from .core.registry import (
    calculate_cost,
    get_available_models,
    get_config,
    is_model_available,
)
from .errors import ConfigurationError, MistralSDKError
from .models.conversation_types import ConversationMessage, ToolCall
from .models.conversation_types import TurnRole as ConversationRole
from .models.generation import (
    GenerationParams,
    GenerationResponse,
    ModelConfig,
    ProviderType,
)
from .models.tools import Tool
from .providers.base import ProviderError
from .providers.mistral.adapter import MistralProvider

__all__ = [
    # Main client
    "MistralClient",
    "MistralProvider",
    "generate",

    # Normalization
    "normalize_messages",
    "form_parameters",
    "build_params",
    "normalize_usage",

    # Schema
    "SCHEMA",
    "SchemaField",
    "get_schema",

    # Registry functions
    "get_config",
    "get_available_models",
    "is_model_available",
    "calculate_cost",

    # Errors
    "MistralSDKError",
    "ConfigurationError",
    "ProviderError",

    # Models
    "ProviderType",
    "GenerationParams",
    "GenerationResponse",
    "ModelConfig",
    "ConversationMessage",
    "ConversationRole",
    "ToolCall",
    "Tool",
]
