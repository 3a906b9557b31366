"""Compiled tree queries

A Query is a set of patterns compiled against one language. Running it
against a Node streams `(Node, capture_name)` pairs, or whole matches
grouped by the pattern that produced them.

Execution goes through one process-wide engine query cursor. It's created
lazily, reset for every run, and guarded by a lock. Results are collected
while the lock is held and handed back after it's released.
"""

from __future__ import annotations

import logging
import re
import threading
from dataclasses import dataclass, field
from typing import Any, Iterator, Optional

import tree_sitter
from tree_sitter import Point

from .constants import IDENT_PUNCTUATION, MAX_POINT, MIN_POINT
from .edits import LineIndex
from .exceptions import (
    InvalidArgument,
    QueryCompileError,
    QuerySyntaxError,
    UnknownCapture,
    UnknownField,
    UnknownNodeType,
)
from .language import Language
from .node import Node

logger = logging.getLogger(__name__)

_ROW_COL = re.compile(r"row (\d+), column (\d+)")
_OFFSET = re.compile(r"offset (\d+)")
_TRAILING_WORD = re.compile(r"(\S+)\s*$")

# (message fragment, error class, message prefix)
_ERROR_KINDS: tuple[tuple[str, type[QueryCompileError], str], ...] = (
    ("node type", UnknownNodeType, "Invalid node type"),
    ("field name", UnknownField, "Invalid field name"),
    ("capture name", UnknownCapture, "Invalid capture name"),
)


def _token_at(source: bytes, offset: int) -> str:
    """Get the identifier that starts at the offset"""
    end = offset
    while end < len(source):
        ch = chr(source[end])
        if not (ch.isalnum() or ch in IDENT_PUNCTUATION):
            break
        end += 1
    return source[offset:end].decode("utf8", errors="replace")


def _compile_error(source: bytes, err: Exception) -> QueryCompileError:
    """Translate an engine query error into a QueryCompileError"""
    message = str(err)

    offset: Optional[int] = None
    found = _ROW_COL.search(message)
    at_offset = _OFFSET.search(message)
    if found is not None:
        row, column = int(found.group(1)), int(found.group(2))
        lines = LineIndex(source)
        if row < len(lines):
            offset = min(lines.point_to_byte((row, column)), len(source))
    elif at_offset is not None:
        offset = int(at_offset.group(1))
    elif "EOF" in message:
        offset = len(source)

    for fragment, cls, prefix in _ERROR_KINDS:
        if fragment not in message:
            continue
        token = _token_at(source, offset) if offset is not None else ""
        if not token:
            trailing = _TRAILING_WORD.search(message)
            token = trailing.group(1) if trailing else ""
            if offset is None and token and token.encode("utf8") in source:
                offset = source.index(token.encode("utf8"))
        return cls(f"{prefix} {token}", offset, token)

    if offset is None:
        return QuerySyntaxError(f"Invalid syntax: {message}", None, None)
    return QuerySyntaxError(f"Invalid syntax at offset {offset}", offset, None)


@dataclass
class QueryMatch:
    """Every capture produced by one instance of one pattern"""

    pattern_index: int
    captures: list[tuple[Node, str]] = field(default_factory=list)


class _ExecutionCursor:
    """The shared engine query cursor

    The engine binds a query cursor to one query, so a new one is only made
    when a different query comes through.
    """

    def __init__(self):
        self._cursor: Optional[tree_sitter.QueryCursor] = None
        self._query: Optional[tree_sitter.Query] = None
        self.lock = threading.Lock()

    def reset(
        self,
        query: tree_sitter.Query,
        start_point: Point | tuple[int, int],
        end_point: Point | tuple[int, int],
    ) -> tree_sitter.QueryCursor:
        """Get the cursor ready for a new run. Call with the lock held"""
        if self._cursor is None or self._query is not query:
            self._cursor = tree_sitter.QueryCursor(query)
            self._query = query
        self._cursor.set_point_range(tuple(start_point), tuple(end_point))
        return self._cursor


_execution_cursor = _ExecutionCursor()


class Query:
    """A set of patterns to search for in a syntax tree"""

    def __init__(self, language: Any, source: str):
        if not isinstance(language, Language):
            language = Language(language)
        if isinstance(source, bytes):
            try:
                source = source.decode("utf8")
            except UnicodeDecodeError as err:
                raise InvalidArgument("Query source must be valid UTF-8") from err
        if not isinstance(source, str):
            raise InvalidArgument("Query source must be str or bytes")

        self.language: Language = language
        try:
            self._query = tree_sitter.Query(language.handle, source)
        except tree_sitter.QueryError as err:
            raise _compile_error(source.encode("utf8"), err) from err

        self.capture_names: list[str] = [
            self._query.capture_name(i) for i in range(self._query.capture_count)
        ]
        self._capture_index: dict[str, int] = {}
        for i, name in enumerate(self.capture_names):
            self._capture_index.setdefault(name, i)
        logger.debug(
            "Compiled query with %d patterns and %d captures",
            self.pattern_count,
            len(self.capture_names),
        )

    @property
    def pattern_count(self) -> int:
        return self._query.pattern_count

    def _execute(
        self,
        node: Node,
        start_point: Optional[Point | tuple[int, int]],
        end_point: Optional[Point | tuple[int, int]],
    ) -> list[tuple[int, dict[str, list[tree_sitter.Node]]]]:
        if not isinstance(node, Node):
            raise InvalidArgument("First argument must be a Node")
        start = MIN_POINT if start_point is None else start_point
        end = MAX_POINT if end_point is None else end_point
        with _execution_cursor.lock:
            cursor = _execution_cursor.reset(self._query, start, end)
            return cursor.matches(node._node)

    def _ordered(
        self, node: Node, groups: dict[str, list[tree_sitter.Node]]
    ) -> list[tuple[tuple[int, int, int], Node, str]]:
        """Flatten one match into (sort key, Node, name), sorted

        The key is (start byte, negated end byte, capture index), so a node
        comes before the nodes it encloses when they start at the same byte
        """
        out = []
        for name, engine_nodes in groups.items():
            capture_index = self._capture_index[name]
            for engine_node in engine_nodes:
                key = (engine_node.start_byte, -engine_node.end_byte, capture_index)
                out.append((key, Node(engine_node, node.tree), name))
        out.sort(key=lambda item: item[0])
        return out

    def captures(
        self,
        node: Node,
        start_point: Optional[Point | tuple[int, int]] = None,
        end_point: Optional[Point | tuple[int, int]] = None,
    ) -> Iterator[tuple[Node, str]]:
        """Stream every capture within the node, in document order

        Args:
            node: The node to search within
            start_point: Optional (row, column) to start searching from
            end_point: Optional (row, column) to stop searching at

        Returns:
            An iterator of (Node, capture name) pairs, ordered by start byte.
            Enclosing nodes come before the nodes inside them, then ties go
            to the earlier pattern and the earlier capture in it
        """
        found = []
        for pattern_index, groups in self._execute(node, start_point, end_point):
            for (start, neg_end, index), capture, name in self._ordered(node, groups):
                found.append(((start, neg_end, pattern_index, index), capture, name))
        found.sort(key=lambda item: item[0])
        return ((capture, name) for _key, capture, name in found)

    def matches(
        self,
        node: Node,
        start_point: Optional[Point | tuple[int, int]] = None,
        end_point: Optional[Point | tuple[int, int]] = None,
    ) -> list[QueryMatch]:
        """Get every match within the node, grouped by pattern instance"""
        out = []
        for pattern_index, groups in self._execute(node, start_point, end_point):
            match = QueryMatch(pattern_index)
            for _key, capture, name in self._ordered(node, groups):
                match.captures.append((capture, name))
            out.append(match)
        return out

    def __repr__(self):
        return f"<Query patterns={self.pattern_count}, captures={self.capture_names}>"
