"""Request-side hooks: turn messages, parameters and tools into a request body."""

from typing import Any, Dict, List, Optional, Sequence, Union

from ...core.normalization.messages import normalize_messages
from ...core.normalization.params import form_parameters
from ...errors import ConfigurationError
from ...models.generation import GenerationParams
from ...models.tools import Tool


def setup(parameters: Dict[str, Any], stream: bool) -> Dict[str, Any]:
    """Set the stream flag for streamed requests.

    ``stream_options`` is never added; the endpoint rejects it.
    """
    if stream:
        parameters["stream"] = True
    return parameters


def form_messages(
    messages: Union[str, Sequence[Any]],
    request_id: Optional[str] = None,
) -> Dict[str, List[Dict[str, Any]]]:
    """Build the ``messages`` section of the body from a prompt or conversation."""
    if isinstance(messages, str):
        messages = [{"role": "user", "content": messages}]
    return {"messages": normalize_messages(messages, request_id=request_id)}


def form_tools(tools: Optional[Sequence[Union[Tool, Dict[str, Any]]]]) -> Optional[List[Dict[str, Any]]]:
    """Format tool definitions as function tools.

    Dicts that are already in ``{"type": "function", "function": {...}}``
    form are passed through.

    Raises:
        ConfigurationError: If a tool dict has no name
    """
    if not tools:
        return None

    formatted = []
    for tool in tools:
        if isinstance(tool, dict):
            if tool.get("type") == "function" and "function" in tool:
                formatted.append(tool)
                continue
            name = tool.get("name")
            if not name:
                raise ConfigurationError(
                    f"Tool definition has no name: {tool!r}",
                    errors={"tools": "Each tool needs a name or a function definition"}
                )
            description = tool.get("description", "")
            parameters = tool.get("parameters") or {}
        else:
            name = tool.name
            description = tool.description
            parameters = tool.parameters
        formatted.append({
            "type": "function",
            "function": {
                "name": name,
                "description": description,
                "parameters": parameters or {"type": "object", "properties": {}},
            },
        })
    return formatted


def build_chat_payload(
    messages: Union[str, Sequence[Any]],
    params: Union[GenerationParams, Dict[str, Any]],
    tools: Optional[Sequence[Union[Tool, Dict[str, Any]]]] = None,
    stream: bool = False,
    request_id: Optional[str] = None,
) -> Dict[str, Any]:
    """Assemble the full chat-completions request body.

    Raises:
        ConfigurationError: If parameters fail schema validation
    """
    payload = form_parameters(params)
    payload = setup(payload, stream)
    payload.update(form_messages(messages, request_id=request_id))

    formatted_tools = form_tools(tools)
    if formatted_tools:
        payload["tools"] = formatted_tools

    return payload
