"""
Conversation normalisation for the Mistral chat endpoint.

The endpoint is strict about message shape and ordering:

- only ``role``, ``content``, ``tool_calls`` and ``tool_call_id`` are accepted
  on a message, and tool calls only carry ``id``, ``function`` and ``type``;
- a user message may not directly follow a tool message. A tool result has
  to be consumed by the assistant before the user speaks again.

``normalize_messages`` builds a new list satisfying both rules. The caller's
list and message objects are left untouched.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Sequence

from ...observability.logging import ProviderLogger

logger = ProviderLogger("mistral", component="normalization")

CANONICAL_FIELDS = ("role", "content", "tool_calls", "tool_call_id")
TOOL_CALL_FIELDS = ("id", "function", "type")


def _get(obj: Any, key: str) -> Any:
    """Read a field from either a plain dict or a model object."""
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _role_value(role: Any) -> Any:
    if isinstance(role, Enum):
        return role.value
    return role


def shape_tool_call(tool_call: Any) -> Dict[str, Any]:
    """Project a tool call down to exactly {id, function, type}."""
    return {key: _get(tool_call, key) for key in TOOL_CALL_FIELDS}


def shape_message(message: Any) -> Dict[str, Any]:
    """Project a message onto the canonical field set.

    ``role`` and ``content`` are always present. ``tool_calls`` and
    ``tool_call_id`` are only emitted when set.
    """
    shaped: Dict[str, Any] = {
        "role": _role_value(_get(message, "role")),
        "content": _get(message, "content"),
    }

    tool_calls = _get(message, "tool_calls")
    if tool_calls is not None:
        shaped["tool_calls"] = [shape_tool_call(tc) for tc in tool_calls]

    tool_call_id = _get(message, "tool_call_id")
    if tool_call_id is not None:
        shaped["tool_call_id"] = tool_call_id

    return shaped


def drop_user_after_tool(messages: Sequence[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Drop user messages that directly follow a tool message.

    A user message following a dropped user message is compared against the
    same tool message, so every user turn in a tool -> user -> user chain
    goes.
    """
    result: List[Dict[str, Any]] = []
    for message in messages:
        if result and result[-1].get("role") == "tool" and message.get("role") == "user":
            continue
        result.append(message)
    return result


def normalize_messages(
    messages: Sequence[Any],
    request_id: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """
    Produce a conversation the Mistral endpoint will accept.

    Args:
        messages: Ordered conversation turns, as ConversationMessage objects
            or plain dicts. Unknown roles pass through unchanged.
        request_id: Optional request ID for log correlation

    Returns:
        New list of plain-dict messages in the original relative order
    """
    shaped = [shape_message(m) for m in messages]
    normalized = drop_user_after_tool(shaped)

    dropped = len(shaped) - len(normalized)
    logger.debug(
        "Normalized messages",
        request_id=request_id,
        original_count=len(shaped),
        final_count=len(normalized),
        dropped=dropped if dropped else None
    )
    return normalized
