"""
Task Registry - Models.

============================================================
TASK RECORD
============================================================

A Task is immutable once built. The registry produces a new
record on every update, so a Task handed to a caller can never
change the registry's authoritative copy.

- id:         opaque UUID4 string, set at creation
- title:      non-empty trimmed text
- completed:  defaults to False
- created_at: UTC timestamp, set at creation

============================================================
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict

from core.clock import to_iso8601


@dataclass(frozen=True)
class Task:
    """A single unit of work."""
    id: str
    title: str
    created_at: datetime
    completed: bool = False

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the wire representation."""
        return {
            "id": self.id,
            "title": self.title,
            "completed": self.completed,
            "createdAt": to_iso8601(self.created_at),
        }
