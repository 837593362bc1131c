from pydantic import BaseModel, ConfigDict
from typing import List, Dict, Any, Optional
from enum import Enum


class TurnRole(str, Enum):
    """Conversation turn roles."""
    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class ToolCall(BaseModel):
    """A function call requested by the assistant."""
    model_config = ConfigDict(extra="allow")

    id: str
    function: Dict[str, Any]
    type: str = "function"


class ConversationMessage(BaseModel):
    """Message format for LLM providers.

    Extra fields are accepted so that host-side representations can be
    passed straight in; the message normaliser strips them before sending.
    """
    model_config = ConfigDict(extra="allow", use_enum_values=True)

    role: TurnRole
    content: Optional[str] = None
    tool_calls: Optional[List[ToolCall]] = None
    tool_call_id: Optional[str] = None
