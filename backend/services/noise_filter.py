"""
Noise Filter Service - Drop changes explained by known renames and reflow

A changed block is noise when its removed lines, after whitespace/comment
normalization and the replacement table, read exactly like its added lines.
Hunks left without changed blocks and files left without hunks are dropped.

The output is meant for human review. Hunk headers are not renumbered when
one of several changed blocks is dropped, so surrounding context lines may
no longer line up with anything.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Sequence

from models.diff import Block, ChangedBlock, ContextBlock, FileDiff, Hunk, Replacement
from models.filter import FilterResponse, FilterStats

from .diff_parser import parse_file_diffs
from .diff_serializer import render_file_diffs
from .replacements import REPLACEMENTS, apply_replacements

logger = logging.getLogger(__name__)

_WHITESPACE_RUN_RE = re.compile(r"\s{2,}")


def _strip_comment_marker(line: str) -> str:
    line = line.lstrip()
    if line.startswith("// "):
        return line[3:]
    return line


def normalize_lines(lines: Iterable[str]) -> str:
    """
    Canonicalize a run of lines for fuzzy comparison.

    1. Strip indentation and a leading "// " so reflowed comments compare equal.
    2. Join with spaces and squash whitespace runs into a single space.
    3. Undo the "( " / " ," / " )" artifacts the squashing leaves behind when
       an argument list was wrapped onto the following line.
    """
    joined = " ".join(_strip_comment_marker(line) for line in lines)
    text = _WHITESPACE_RUN_RE.sub(" ", joined)
    return text.replace("( ", "(").replace(" ,", ",").replace(" )", ")")


class NoiseFilter:
    """Filter mechanical-rename noise out of parsed file diffs"""

    def __init__(self, rules: Sequence[Replacement] = REPLACEMENTS):
        self.rules = tuple(rules)

    def is_noise(self, block: ChangedBlock) -> bool:
        """Check whether the replacement table fully explains a changed block"""
        # Pure insertions and deletions always carry information
        if not block.removed or not block.added:
            return False

        transformed = apply_replacements(normalize_lines(block.removed), self.rules)
        return transformed == normalize_lines(block.added)

    def filter_block(self, block: Block) -> Block | None:
        if isinstance(block, ChangedBlock) and self.is_noise(block):
            return None
        return block

    def filter_hunk(self, hunk: Hunk, path: str = "") -> Hunk | None:
        """Drop noise blocks, and the hunk itself if no changed block survives"""
        blocks: list[Block] = []
        for block in hunk.blocks:
            kept = self.filter_block(block)
            if kept is None:
                if logger.isEnabledFor(logging.DEBUG):
                    logger.debug(
                        "Elided block in %s %s: %d removed, %d added",
                        path or "<unknown>",
                        hunk.header.rstrip(),
                        len(block.removed),
                        len(block.added),
                    )
                continue
            blocks.append(kept)

        if not any(isinstance(block, ChangedBlock) for block in blocks):
            return None

        return hunk.model_copy(update={"blocks": tuple(_merge_context_blocks(blocks))})

    def filter_file_diff(self, file_diff: FileDiff) -> FileDiff | None:
        hunks = []
        for hunk in file_diff.hunks:
            kept = self.filter_hunk(hunk, file_diff.path)
            if kept is not None:
                hunks.append(kept)

        if not hunks:
            logger.debug("Elided file %s", file_diff.path)
            return None
        return file_diff.model_copy(update={"hunks": tuple(hunks)})

    def filter_file_diffs(self, file_diffs: Iterable[FileDiff]) -> list[FileDiff]:
        """Return only the files, hunks and blocks that are not noise"""
        filtered = []
        for file_diff in file_diffs:
            kept = self.filter_file_diff(file_diff)
            if kept is not None:
                filtered.append(kept)
        return filtered

    def filter_diff(self, diff_text: str) -> FilterResponse:
        """Parse, filter and re-render raw diff text (raises DiffParseError)"""
        file_diffs = parse_file_diffs(diff_text)
        filtered = self.filter_file_diffs(file_diffs)
        stats = collect_stats(file_diffs, filtered)

        logger.debug(
            "Kept %d/%d files, %d/%d hunks, %d/%d changed blocks",
            stats.files_kept,
            stats.files_total,
            stats.hunks_kept,
            stats.hunks_total,
            stats.changed_blocks_kept,
            stats.changed_blocks_total,
        )

        return FilterResponse(diff=render_file_diffs(filtered), stats=stats)


def _merge_context_blocks(blocks: list[Block]) -> list[Block]:
    # Dropping a changed block can leave two context runs side by side;
    # re-parsing the rendered text would see them as one.
    merged: list[Block] = []
    for block in blocks:
        previous = merged[-1] if merged else None
        if (
            isinstance(block, ContextBlock)
            and isinstance(previous, ContextBlock)
            and not previous.no_newline
        ):
            merged[-1] = ContextBlock(
                lines=previous.lines + block.lines,
                no_newline=block.no_newline,
            )
        else:
            merged.append(block)
    return merged


def _count_changed_blocks(file_diffs: Sequence[FileDiff]) -> int:
    return sum(
        isinstance(block, ChangedBlock)
        for file_diff in file_diffs
        for hunk in file_diff.hunks
        for block in hunk.blocks
    )


def collect_stats(original: Sequence[FileDiff], filtered: Sequence[FileDiff]) -> FilterStats:
    """Summarize what a filtering pass removed"""
    return FilterStats(
        files_total=len(original),
        files_kept=len(filtered),
        hunks_total=sum(len(f.hunks) for f in original),
        hunks_kept=sum(len(f.hunks) for f in filtered),
        changed_blocks_total=_count_changed_blocks(original),
        changed_blocks_kept=_count_changed_blocks(filtered),
    )
