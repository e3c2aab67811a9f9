"""Render parsed (and possibly filtered) diffs back to unified diff text"""

from __future__ import annotations

from collections.abc import Iterable

from models.diff import Block, ContextBlock, FileDiff, Hunk

from .diff_parser import NO_NEWLINE_MARKER


def _render_run(prefix: str, lines: Iterable[str], no_newline: bool) -> str:
    text = "".join(f"{prefix}{line}\n" for line in lines)
    if no_newline:
        text += NO_NEWLINE_MARKER + "\n"
    return text


def render_block(block: Block) -> str:
    if isinstance(block, ContextBlock):
        return _render_run(" ", block.lines, block.no_newline)
    return _render_run("-", block.removed, block.removed_no_newline) + _render_run(
        "+", block.added, block.added_no_newline
    )


def render_hunk(hunk: Hunk) -> str:
    body = "".join(render_block(block) for block in hunk.blocks)
    if hunk.missing_final_newline and body.endswith("\n"):
        body = body[:-1]
    return hunk.header + body


def render_file_diff(file_diff: FileDiff) -> str:
    return file_diff.header + "".join(render_hunk(hunk) for hunk in file_diff.hunks)


def render_file_diffs(file_diffs: Iterable[FileDiff]) -> str:
    """Concatenate rendered file diffs; no separators are inserted"""
    return "".join(render_file_diff(file_diff) for file_diff in file_diffs)
