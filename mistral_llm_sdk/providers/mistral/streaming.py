from __future__ import annotations

from typing import Any, AsyncGenerator, Dict, Optional, Tuple

from ...core.normalization.usage import normalize_usage
from ...streaming import StreamAdapter


async def stream_chat(
    client: Any,
    payload: Dict[str, Any],
    adapter: StreamAdapter,
    timeout: Optional[float] = None,
) -> AsyncGenerator[str, None]:
    """Stream a chat completion yielding only incremental text."""
    stream = await client.chat.completions.create(**payload, timeout=timeout)
    async for chunk in stream:
        text = adapter.normalize_delta(chunk).get_text()
        if text:
            await adapter.track_chunk(len(text))
            yield text


async def stream_chat_with_usage(
    client: Any,
    payload: Dict[str, Any],
    adapter: StreamAdapter,
    timeout: Optional[float] = None,
) -> AsyncGenerator[Tuple[Optional[str], Optional[Dict[str, Any]]], None]:
    """Stream a chat completion yielding (text, None) then a final (None, usage).

    Usage arrives on the last chunk without ``stream_options``; if it never
    does, the final usage is all zeros.
    """
    usage: Optional[Dict[str, Any]] = None
    stream = await client.chat.completions.create(**payload, timeout=timeout)
    async for chunk in stream:
        text = adapter.normalize_delta(chunk).get_text()
        if text:
            await adapter.track_chunk(len(text))
            yield (text, None)
        if adapter.should_emit_usage(chunk):
            usage = adapter.extract_usage(chunk)

    yield (
        None,
        {
            "usage": normalize_usage(usage, "mistral"),
            "model": payload.get("model"),
            "provider": adapter.provider,
            "finish_reason": adapter.finish_reason,
            "tool_calls": adapter.get_tool_calls(),
        },
    )
