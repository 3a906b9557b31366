from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import numpy as np
from tree_sitter import Point


def _zcs(ary) -> np.ndarray:
    """leading Zero Cumulative Summation"""
    return np.concatenate(([0], np.cumsum(ary)))


class LineIndex:
    """Keep track of line/byte relationships in a source buffer

    Properties:
        line_starts: The byte offset where each line begins. Always starts with 0
    """

    def __init__(self, source: bytes):
        raw = np.frombuffer(source, dtype=np.uint8)
        newlines = np.flatnonzero(raw == 0x0A)
        line_lengths = np.diff(np.concatenate(([-1], newlines)))
        self.line_starts: np.ndarray = _zcs(line_lengths)
        self.size: int = len(source)

    def __len__(self):
        return len(self.line_starts)

    def byte_to_point(self, byteidx: int) -> Point:
        """Convert a byte offset into a (row, column) Point, column in bytes"""
        if byteidx < 0 or byteidx > self.size:
            raise IndexError(f"Byte offset {byteidx} is outside of the source")
        row = int(np.searchsorted(self.line_starts, byteidx, "right")) - 1
        return Point(row, byteidx - int(self.line_starts[row]))

    def point_to_byte(self, point: Point | tuple[int, int]) -> int:
        """Convert a (row, column) Point into a byte offset"""
        row, column = point
        if row < 0 or row >= len(self.line_starts):
            raise IndexError(f"Row {row} is outside of the source")
        return int(self.line_starts[row]) + column


@dataclass(frozen=True)
class InputEdit:
    """The six coordinates that describe one change to a source buffer"""

    start_byte: int
    old_end_byte: int
    new_end_byte: int
    start_point: Point
    old_end_point: Point
    new_end_point: Point

    def as_kwargs(self) -> dict[str, Any]:
        return {
            "start_byte": self.start_byte,
            "old_end_byte": self.old_end_byte,
            "new_end_byte": self.new_end_byte,
            "start_point": self.start_point,
            "old_end_point": self.old_end_point,
            "new_end_point": self.new_end_point,
        }


def _common_prefix(old: np.ndarray, new: np.ndarray) -> int:
    size = min(len(old), len(new))
    diffs = np.flatnonzero(old[:size] != new[:size])
    return int(diffs[0]) if len(diffs) else size


def compute_edit(old_source: bytes, new_source: bytes) -> Optional[InputEdit]:
    """Find the single smallest edit that turns the old source into the new one

    Returns:
        The edit, or None if the sources are identical
    """
    if old_source == new_source:
        return None

    old = np.frombuffer(old_source, dtype=np.uint8)
    new = np.frombuffer(new_source, dtype=np.uint8)
    start = _common_prefix(old, new)

    # The suffix can't reach back past the shared prefix on either side
    room = min(len(old), len(new)) - start
    suffix = _common_prefix(old[::-1][:room], new[::-1][:room])

    old_end = len(old) - suffix
    new_end = len(new) - suffix
    old_lines = LineIndex(old_source)
    new_lines = LineIndex(new_source)
    return InputEdit(
        start_byte=start,
        old_end_byte=old_end,
        new_end_byte=new_end,
        start_point=old_lines.byte_to_point(start),
        old_end_point=old_lines.byte_to_point(old_end),
        new_end_point=new_lines.byte_to_point(new_end),
    )
