"""Streaming layer for real-time responses.

This layer handles:
- Stream chunk normalization
- Tool-call fragment reassembly
- Usage extraction from the final chunk
"""

from .adapter import StreamAdapter
from .tool_calls import ToolCallAccumulator
from .types import StreamDelta

__all__ = [
    "StreamAdapter",
    "ToolCallAccumulator",
    "StreamDelta",
]
