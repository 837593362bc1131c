"""Response-side hooks: read completions and build tool-call turns."""

from __future__ import annotations

import json
from typing import Any, Dict, List, Optional


def _get(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


def _function_dict(function: Any) -> Dict[str, Any]:
    if isinstance(function, dict):
        return dict(function)
    return {
        "name": _get(function, "name"),
        "arguments": _get(function, "arguments"),
    }


def _first_message(response: Any) -> Any:
    choices = _get(response, "choices")
    if not choices:
        return None
    return _get(choices[0], "message")


def extract_tool_calls(message: Any) -> Optional[List[Dict[str, Any]]]:
    """Tool calls on a completion message as plain {id, function, type} dicts."""
    tool_calls = _get(message, "tool_calls")
    if not tool_calls:
        return None
    return [
        {
            "id": _get(tc, "id"),
            "function": _function_dict(_get(tc, "function")),
            "type": _get(tc, "type") or "function",
        }
        for tc in tool_calls
    ]


def extract_usage(response: Any) -> Optional[Dict[str, Any]]:
    usage = _get(response, "usage")
    if usage is None:
        return None
    if isinstance(usage, dict):
        return usage
    if hasattr(usage, "model_dump"):
        return usage.model_dump()
    return dict(usage.__dict__)


def chat_output(response: Any) -> Dict[str, Any]:
    """Read a non-streamed completion.

    Returns:
        Dict with "text", "tool_calls", "finish_reason" and raw "usage"
    """
    message = _first_message(response)
    choices = _get(response, "choices")
    finish_reason = _get(choices[0], "finish_reason") if choices else None
    content = _get(message, "content")
    return {
        "text": content if isinstance(content, str) else "",
        "tool_calls": extract_tool_calls(message),
        "finish_reason": finish_reason if isinstance(finish_reason, str) else None,
        "usage": extract_usage(response),
    }


def inline_output(response: Any) -> Optional[str]:
    """Text content only, for inline (non-chat) use."""
    content = _get(_first_message(response), "content")
    return content if isinstance(content, str) else None


def tokens(usage: Optional[Dict[str, Any]]) -> Optional[int]:
    """Total token count from a usage block."""
    if not usage:
        return None
    total = usage.get("total_tokens")
    if total:
        return int(total)
    return int(usage.get("prompt_tokens") or 0) + int(usage.get("completion_tokens") or 0)


def format_tool_calls(tool_calls: List[Any], content: Optional[str] = None) -> Dict[str, Any]:
    """Assistant turn carrying the tool calls the model asked for."""
    return {
        "role": "assistant",
        "content": content,
        "tool_calls": [
            {
                "id": _get(tc, "id"),
                "function": _function_dict(_get(tc, "function")),
                "type": _get(tc, "type") or "function",
            }
            for tc in tool_calls
        ],
    }


def output_response(tool_call: Any, output: Any) -> Dict[str, Any]:
    """Tool turn carrying the result of one tool call."""
    if not isinstance(output, str):
        output = json.dumps(output)
    return {
        "role": "tool",
        "tool_call_id": _get(tool_call, "id"),
        "content": output,
    }
