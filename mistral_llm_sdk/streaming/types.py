from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


@dataclass
class StreamDelta:
    """Normalized streaming delta.

    Attributes:
        text: Text content carried by this chunk (may be empty)
        provider: Name of the provider that generated this delta
        tool_call_deltas: Raw tool-call fragments carried by this chunk
        finish_reason: Set on the chunk that ends a choice
        raw_event: Original provider event for debugging
        metadata: Additional metadata about this delta
    """
    text: str
    provider: str
    tool_call_deltas: List[Any] = field(default_factory=list)
    finish_reason: Optional[str] = None
    raw_event: Optional[Any] = None
    metadata: Optional[Dict[str, Any]] = None

    def get_text(self) -> str:
        return self.text
