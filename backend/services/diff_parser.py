"""
Diff Parser - Structure unified diff text into files, hunks and blocks

Parsing is lossless: rendering an unfiltered parse result with
services.diff_serializer reproduces the input byte-for-byte.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field

from models.diff import Block, ChangedBlock, ContextBlock, FileDiff, Hunk

logger = logging.getLogger(__name__)

NO_NEWLINE_MARKER = "\\ No newline at end of file"

# diff --git a/ash/accelerators/accelerator_capslock_state_machine.cc b/ash/accelerators/accelerator_capslock_state_machine.cc
# index 28c373b242560..75f0f75e738a2 100644
# --- a/ash/accelerators/accelerator_capslock_state_machine.cc
# +++ b/ash/accelerators/accelerator_capslock_state_machine.cc
FILE_HEADER_RE = re.compile(
    r"^(?:diff --git a/.+ b/.+\n"
    r"(?:(?:old mode|new mode|new file mode|deleted file mode|similarity index"
    r"|dissimilarity index|rename from|rename to|copy from|copy to) .+\n)*"
    r"index [0-9a-f]+\.\.[0-9a-f]+.*\n)?"
    r"--- .+\n"
    r"\+\+\+ .+(?:\n|\Z)",
    re.MULTILINE,
)

# @@ -27,8 +27,8 @@ AcceleratorCapslockStateMachine::AcceleratorCapslockStateMachine(
HUNK_HEADER_RE = re.compile(
    r"^@@ -\d+(?:,\d+)? \+\d+(?:,\d+)? @@.*(?:\n|\Z)",
    re.MULTILINE,
)


class DiffParseError(ValueError):
    """Raised when the input does not follow the unified diff grammar"""


def parse_file_diffs(diff_text: str) -> list[FileDiff]:
    """
    Parse unified diff text into FileDiff objects.

    Args:
        diff_text: Complete raw diff, as produced by `git diff` or `diff -u`

    Returns:
        One FileDiff per file header, in input order

    Raises:
        DiffParseError: If text precedes the first file header, or a hunk
            contains a line that is not context, removal, addition or a
            no-newline annotation
    """
    headers = list(FILE_HEADER_RE.finditer(diff_text))

    preamble_end = headers[0].start() if headers else len(diff_text)
    if preamble_end:
        raise DiffParseError(
            f"Unexpected text before first file header: {_preview(diff_text[:preamble_end])!r}"
        )

    files: list[FileDiff] = []
    for index, match in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(diff_text)
        files.append(
            FileDiff(
                header=match.group(0),
                hunks=tuple(parse_hunks(diff_text[match.end():end])),
            )
        )

    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Parsed %d files with %d hunks",
            len(files),
            sum(len(f.hunks) for f in files),
        )
    return files


def parse_hunks(file_text: str) -> list[Hunk]:
    """Parse the hunk section that follows one file header"""
    headers = list(HUNK_HEADER_RE.finditer(file_text))

    leading_end = headers[0].start() if headers else len(file_text)
    if leading_end:
        raise DiffParseError(
            f"Unexpected text before first hunk header: {_preview(file_text[:leading_end])!r}"
        )

    hunks = []
    for index, match in enumerate(headers):
        end = headers[index + 1].start() if index + 1 < len(headers) else len(file_text)
        hunks.append(parse_hunk(match.group(0), file_text[match.end():end]))
    return hunks


def parse_hunk(header: str, content: str) -> Hunk:
    """Build a Hunk from its header line and the raw lines that follow it"""
    missing_final_newline = bool(content) and not content.endswith("\n")
    lines = content.split("\n")
    if not missing_final_newline:
        # split() leaves an empty string after the final line break
        lines.pop()

    return Hunk(
        header=header,
        blocks=tuple(group_blocks(lines, header)),
        missing_final_newline=missing_final_newline,
    )


def group_blocks(lines: list[str], header: str = "") -> list[Block]:
    """
    Group tagged hunk lines into context and changed blocks.

    A block ends whenever the line tag changes, except that removed lines
    directly followed by added lines stay in the same changed block.
    No-newline annotations attach to the line before them.
    """
    blocks: list[Block] = []
    builder: _BlockBuilder | None = None

    for line in lines:
        tag, payload = line[:1], line[1:]

        if tag == "\\":
            if line != NO_NEWLINE_MARKER:
                raise DiffParseError(f"Malformed no-newline annotation in {_where(header)}: {line!r}")
            if builder is None:
                raise DiffParseError(f"No-newline annotation without a preceding line in {_where(header)}")
            builder.mark_no_newline(header)
            continue

        if tag not in (" ", "-", "+"):
            raise DiffParseError(f"Unexpected line in {_where(header)}: {line!r}")

        if builder is None or not builder.accepts(tag):
            if builder is not None:
                blocks.append(builder.build())
            builder = _BlockBuilder()
        builder.add(tag, payload, header)

    if builder is not None:
        blocks.append(builder.build())
    return blocks


@dataclass
class _BlockBuilder:
    """Accumulates one block's lines during grouping"""

    context: list[str] = field(default_factory=list)
    removed: list[str] = field(default_factory=list)
    added: list[str] = field(default_factory=list)
    annotated: set[str] = field(default_factory=set)
    last_tag: str | None = None

    def accepts(self, tag: str) -> bool:
        return tag == self.last_tag or (self.last_tag == "-" and tag == "+")

    def add(self, tag: str, payload: str, header: str) -> None:
        if tag in self.annotated:
            raise DiffParseError(f"Line follows a no-newline annotation in {_where(header)}: {tag}{payload!r}")
        if tag == " ":
            self.context.append(payload)
        elif tag == "-":
            self.removed.append(payload)
        else:
            self.added.append(payload)
        self.last_tag = tag

    def mark_no_newline(self, header: str) -> None:
        if self.last_tag in self.annotated:
            raise DiffParseError(f"Repeated no-newline annotation in {_where(header)}")
        self.annotated.add(self.last_tag)

    def build(self) -> Block:
        if self.last_tag == " ":
            return ContextBlock(lines=tuple(self.context), no_newline=" " in self.annotated)
        return ChangedBlock(
            removed=tuple(self.removed),
            added=tuple(self.added),
            removed_no_newline="-" in self.annotated,
            added_no_newline="+" in self.annotated,
        )


def _where(header: str) -> str:
    return f"hunk {header.rstrip()!r}" if header else "hunk"


def _preview(text: str, limit: int = 60) -> str:
    first_line = text.split("\n", 1)[0]
    return first_line if len(first_line) <= limit else first_line[:limit] + "..."
