from __future__ import annotations

import time
from typing import Any, Dict, List, Optional

from .tool_calls import ToolCallAccumulator
from .types import StreamDelta


class StreamAdapter:
    """Adapter for normalizing streamed chat-completion chunks.

    Mistral streams OpenAI-style chunks (``chunk.choices[0].delta``). This
    class extracts text, reassembles tool calls, picks up the usage block
    that arrives on the final chunk and tracks streaming metrics.
    """

    def __init__(self, provider: str, model: Optional[str] = None):
        """Initialize StreamAdapter with provider name.

        Args:
            provider: Name of the provider
            model: Model name, for metrics
        """
        self.provider = provider.lower()
        self.model = model
        self.tool_calls = ToolCallAccumulator()
        self.finish_reason: Optional[str] = None
        self._chunk_count = 0
        self._start_time: Optional[float] = None
        self._total_chars = 0
        self._stream_completed: bool = False
        self._error: Optional[Exception] = None

    def normalize_delta(self, chunk: Any) -> StreamDelta:
        """Normalize one streamed chunk.

        Args:
            chunk: Raw chunk from the client

        Returns:
            Normalized StreamDelta object
        """
        text = ""
        tool_call_deltas: List[Any] = []
        finish_reason = None

        choices = getattr(chunk, 'choices', None)
        if choices:
            choice = choices[0]
            delta = getattr(choice, 'delta', None)
            if delta is not None:
                content = getattr(delta, 'content', None)
                if isinstance(content, str):
                    text = content
                fragments = getattr(delta, 'tool_calls', None)
                if fragments:
                    tool_call_deltas = list(fragments)
            reason = getattr(choice, 'finish_reason', None)
            if isinstance(reason, str):
                finish_reason = reason

        for fragment in tool_call_deltas:
            self.tool_calls.add(fragment)
        if finish_reason:
            self.finish_reason = finish_reason

        return StreamDelta(
            text=text,
            provider=self.provider,
            tool_call_deltas=tool_call_deltas,
            finish_reason=finish_reason,
            raw_event=chunk,
            metadata={"chunk_id": self._chunk_count}
        )

    def should_emit_usage(self, chunk: Any) -> bool:
        """Mistral attaches usage to the final chunk."""
        return getattr(chunk, 'usage', None) is not None

    def extract_usage(self, chunk: Any) -> Optional[Dict[str, Any]]:
        """Extract the usage block from a chunk, if present."""
        usage = getattr(chunk, 'usage', None)
        if usage is None:
            return None
        if isinstance(usage, dict):
            return usage
        if hasattr(usage, 'model_dump'):
            return usage.model_dump()
        return dict(usage.__dict__)

    def get_tool_calls(self) -> Optional[List[Dict[str, Any]]]:
        return self.tool_calls.get_tool_calls()

    async def start_stream(self):
        """Mark the start of streaming."""
        self._start_time = time.time()
        self._chunk_count = 0
        self._total_chars = 0

    async def track_chunk(self, chunk_size: int):
        """Track a chunk for metrics.

        Args:
            chunk_size: Size of the chunk in characters
        """
        self._chunk_count += 1
        self._total_chars += chunk_size

    def get_metrics(self) -> Dict[str, Any]:
        """Get streaming metrics."""
        duration = time.time() - self._start_time if self._start_time else 0
        return {
            "chunks": self._chunk_count,
            "total_chars": self._total_chars,
            "duration_seconds": duration,
            "chunks_per_second": self._chunk_count / duration if duration > 0 else 0,
            "chars_per_second": self._total_chars / duration if duration > 0 else 0,
            "tool_calls": len(self.tool_calls.get_tool_calls() or []),
        }

    async def complete_stream(self, error: Optional[Exception] = None):
        """Mark the stream as finished.

        Args:
            error: Error if stream failed
        """
        if self._stream_completed:
            return
        self._stream_completed = True
        self._error = error
