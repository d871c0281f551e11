"""Byte-span edits applied to a parsed module's source."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass


@dataclass(frozen=True)
class TextEdit:
    """Replace ``source[start:end]`` with ``replacement``."""

    start: int
    end: int
    replacement: str


def apply_edits(source: bytes, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits and return the decoded result."""
    ordered = sorted(set(edits), key=lambda edit: (edit.start, edit.end))
    chunks: list[bytes] = []
    cursor = 0
    for edit in ordered:
        if edit.start < cursor:
            raise ValueError(f"Overlapping edits at byte {edit.start}.")
        chunks.append(source[cursor : edit.start])
        chunks.append(edit.replacement.encode("utf-8"))
        cursor = edit.end
    chunks.append(source[cursor:])
    return b"".join(chunks).decode("utf-8")
