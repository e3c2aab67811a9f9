"""Diff-related data models"""

from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class ContextBlock(BaseModel):
    """Run of unchanged lines inside a hunk"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["context"] = "context"
    lines: tuple[str, ...]
    no_newline: bool = False  # last line carries "\ No newline at end of file"


class ChangedBlock(BaseModel):
    """Removed lines followed by the lines that replaced them"""

    model_config = ConfigDict(frozen=True)

    kind: Literal["changed"] = "changed"
    removed: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    removed_no_newline: bool = False
    added_no_newline: bool = False


Block = Annotated[Union[ContextBlock, ChangedBlock], Field(discriminator="kind")]


class Hunk(BaseModel):
    """A single @@-delimited region of a file diff"""

    model_config = ConfigDict(frozen=True)

    header: str  # verbatim, including trailing function context and line break
    blocks: tuple[Block, ...] = ()
    missing_final_newline: bool = False


class FileDiff(BaseModel):
    """Header and hunks for one changed file"""

    model_config = ConfigDict(frozen=True)

    header: str  # verbatim diff --git / index / --- / +++ text
    hunks: tuple[Hunk, ...] = ()

    @property
    def path(self) -> str:
        """New path of the file, or the old one when the file was deleted"""
        old_path = new_path = ""
        for line in self.header.splitlines():
            if line.startswith("--- "):
                old_path = _strip_path_prefix(line[4:], "a/")
            elif line.startswith("+++ "):
                new_path = _strip_path_prefix(line[4:], "b/")
        if new_path and new_path != "/dev/null":
            return new_path
        return old_path


def _strip_path_prefix(path: str, prefix: str) -> str:
    # "--- a/foo.cc\t2024-01-01 ..." style timestamps follow a tab
    path = path.split("\t", 1)[0]
    if path.startswith(prefix):
        return path[len(prefix):]
    return path


class Replacement(BaseModel):
    """Literal substitution explaining a mechanical rename"""

    model_config = ConfigDict(frozen=True)

    before: str = Field(min_length=1)
    after: str
