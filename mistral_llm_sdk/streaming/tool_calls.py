"""Reassembly of tool calls streamed as fragments."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


def _get(obj: Any, key: str) -> Any:
    if obj is None:
        return None
    if isinstance(obj, dict):
        return obj.get(key)
    return getattr(obj, key, None)


class ToolCallAccumulator:
    """Collects tool-call fragments keyed by their ``index``.

    The first fragment for an index carries the id, type and function name;
    later fragments append to the JSON ``arguments`` string.
    """

    def __init__(self):
        self._calls: Dict[int, Dict[str, Any]] = {}

    def add(self, fragment: Any) -> None:
        index = _get(fragment, "index")
        if not isinstance(index, int):
            index = len(self._calls)

        call = self._calls.setdefault(index, {
            "id": None,
            "type": "function",
            "function": {"name": "", "arguments": ""},
        })

        call_id = _get(fragment, "id")
        if isinstance(call_id, str) and call_id:
            call["id"] = call_id
        call_type = _get(fragment, "type")
        if isinstance(call_type, str) and call_type:
            call["type"] = call_type

        function = _get(fragment, "function")
        name = _get(function, "name")
        if isinstance(name, str) and name:
            call["function"]["name"] = name
        arguments = _get(function, "arguments")
        if isinstance(arguments, str):
            call["function"]["arguments"] += arguments

    def has_calls(self) -> bool:
        return bool(self._calls)

    def get_tool_calls(self) -> Optional[List[Dict[str, Any]]]:
        """Completed calls in index order, or None if nothing was streamed.

        A call whose fragments never carried an id gets ``call_<index>``.
        """
        if not self._calls:
            return None
        calls = []
        for index in sorted(self._calls):
            call = dict(self._calls[index])
            if call["id"] is None:
                call["id"] = f"call_{index}"
            calls.append(call)
        return calls
