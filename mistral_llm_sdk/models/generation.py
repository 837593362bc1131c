from pydantic import BaseModel, ConfigDict, Field
from typing import Optional, Dict, Any, List, Union
from enum import Enum

from .conversation_types import ToolCall


class ProviderType(str, Enum):
    """Supported LLM providers."""
    MISTRAL = "mistral"


class GenerationParams(BaseModel):
    """
    Generation parameters for the Mistral chat-completions endpoint.

    Values are not range-checked here: bounds live in the parameter schema
    (config/schema.py) and are enforced by form_parameters, which rejects
    out-of-range values instead of clamping them. Unset fields fall back to
    the schema defaults.
    """
    model_config = ConfigDict(extra="allow")

    model: Optional[str] = Field(None, description="Model identifier")
    temperature: Optional[float] = Field(None, description="Sampling temperature")
    top_p: Optional[float] = Field(None, description="Nucleus sampling parameter")
    max_tokens: Optional[int] = Field(None, description="Maximum tokens to generate")
    stop: Optional[List[str]] = Field(None, description="Stop sequences")
    random_seed: Optional[Union[int, float]] = Field(None, description="Seed for deterministic sampling")
    presence_penalty: Optional[float] = Field(None, description="Presence penalty")
    frequency_penalty: Optional[float] = Field(None, description="Frequency penalty")
    n: Optional[Union[int, float]] = Field(None, description="Number of completions")
    safe_prompt: Optional[bool] = Field(None, description="Inject the safety prompt")

    metadata: Optional[Dict[str, Any]] = Field(
        None,
        description="Additional metadata (request_id, trace_id, etc.)"
    )


class ModelConfig(BaseModel):
    """Model configuration schema."""
    name: str
    display_name: str
    provider: ProviderType
    llm_model_id: str
    description: str
    max_tokens: int = 4096
    temperature: float = 0.0
    enabled: bool = True
    context_length: Optional[int] = None
    input_cost_per_1k_tokens: Optional[float] = None
    output_cost_per_1k_tokens: Optional[float] = None


class GenerationResponse(BaseModel):
    """Response model for generation."""
    text: str
    model: str
    usage: Dict[str, Any]
    cost_usd: Optional[float] = None
    provider: str
    finish_reason: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None


class StreamingResponseWithUsage:
    """Wrapper for streaming responses that can also return usage data."""

    def __init__(self):
        self.chunks = []
        self.usage = None
        self.model = None
        self.provider = None
        self.finish_reason = None
        self.cost_usd = None
        self.tool_calls = None

    def add_chunk(self, chunk: str):
        """Add a chunk to the response."""
        self.chunks.append(chunk)

    def set_usage(self, usage: Dict[str, Any], model: str, provider: str,
                  finish_reason: Optional[str] = None, cost_usd: Optional[float] = None,
                  tool_calls: Optional[List[ToolCall]] = None):
        """Set the usage data after streaming completes."""
        self.usage = usage
        self.model = model
        self.provider = provider
        self.finish_reason = finish_reason
        self.cost_usd = cost_usd
        self.tool_calls = tool_calls

    def get_text(self) -> str:
        """Get the complete text from all chunks."""
        return ''.join(self.chunks)

    def __iter__(self):
        """Allow iteration over chunks."""
        return iter(self.chunks)
