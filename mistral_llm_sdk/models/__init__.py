"""Data models for Mistral LLM SDK."""

from .generation import (
    ProviderType,
    GenerationParams,
    GenerationResponse,
    ModelConfig,
    StreamingResponseWithUsage
)
from .conversation_types import ConversationMessage, ToolCall, TurnRole as ConversationRole
from .tools import Tool

__all__ = [
    # Generation models
    "ProviderType",
    "GenerationParams",
    "GenerationResponse",
    "ModelConfig",
    "StreamingResponseWithUsage",

    # Conversation models
    "ConversationMessage",
    "ConversationRole",
    "ToolCall",
    "Tool"
]
