"""Errors raised by sitterview.

Absent results (no sibling, no parent, unset field) are never errors, they
come back as None.
"""

from __future__ import annotations

from typing import Optional


class SitterError(Exception):
    """Base class for all sitterview errors."""

    pass


class InvalidArgument(SitterError, TypeError):
    """Raised when an operation gets a value of the wrong shape or type."""

    pass


class VersionMismatch(SitterError, ValueError):
    """Raised when a language's ABI version can't be used by this engine build."""

    def __init__(self, version: int, min_version: int, max_version: int):
        self.version = version
        self.min_version = min_version
        self.max_version = max_version
        super().__init__(
            f"Incompatible language version {version}. "
            f"Must be between {min_version} and {max_version}"
        )


class ParseFailure(SitterError, ValueError):
    """Raised when the engine produces no tree at all."""

    pass


class QueryCompileError(SitterError):
    """Raised when query source text can't be compiled

    Attributes:
        kind: One of "node_type", "field", "capture" or "syntax"
        offset: Byte offset of the offending token in the query source
        token: The offending identifier, if there is one
    """

    kind: str = "syntax"

    def __init__(self, message: str, offset: Optional[int], token: Optional[str]):
        self.offset = offset
        self.token = token
        super().__init__(message)


class UnknownNodeType(QueryCompileError):
    kind = "node_type"


class UnknownField(QueryCompileError):
    kind = "field"


class UnknownCapture(QueryCompileError):
    kind = "capture"


class QuerySyntaxError(QueryCompileError):
    kind = "syntax"
