"""Noise filter request/response models"""

from __future__ import annotations

from pydantic import BaseModel

from .diff import FileDiff


class FilterStats(BaseModel):
    """Counts before and after noise filtering"""

    files_total: int = 0
    files_kept: int = 0
    hunks_total: int = 0
    hunks_kept: int = 0
    changed_blocks_total: int = 0
    changed_blocks_kept: int = 0

    @property
    def changed_blocks_elided(self) -> int:
        return self.changed_blocks_total - self.changed_blocks_kept


class FilterRequest(BaseModel):
    """Raw unified diff to parse or filter"""

    diff: str


class FilterResponse(BaseModel):
    """Filtered unified diff"""

    diff: str
    stats: FilterStats


class ParseResponse(BaseModel):
    """Structured view of a unified diff"""

    files: list[FileDiff]


class StreamEvent(BaseModel):
    """SSE stream event"""

    type: str  # "file", "done"
    path: str | None = None
    chunk: str | None = None
    stats: FilterStats | None = None
    done: bool = False
