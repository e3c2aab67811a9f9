"""Models module - Pydantic data models"""

from .diff import Block, ChangedBlock, ContextBlock, FileDiff, Hunk, Replacement
from .filter import (
    FilterRequest,
    FilterResponse,
    FilterStats,
    ParseResponse,
    StreamEvent,
)

__all__ = [
    # Diff models
    "Block",
    "ChangedBlock",
    "ContextBlock",
    "FileDiff",
    "Hunk",
    "Replacement",
    # Filter models
    "FilterRequest",
    "FilterResponse",
    "FilterStats",
    "ParseResponse",
    "StreamEvent",
]
