from .cursor import TreeCursor
from .edits import InputEdit, LineIndex, compute_edit
from .exceptions import (
    InvalidArgument,
    ParseFailure,
    QueryCompileError,
    QuerySyntaxError,
    SitterError,
    UnknownCapture,
    UnknownField,
    UnknownNodeType,
    VersionMismatch,
)
from .language import CURRENT_VERSION, MIN_COMPATIBLE_VERSION, Language, check_version
from .node import Node
from .parser import Parser
from .query import Query, QueryMatch
from .tree import Tree
from .tree_manager import TreeManager

__all__ = [
    "CURRENT_VERSION",
    "InputEdit",
    "InvalidArgument",
    "Language",
    "LineIndex",
    "MIN_COMPATIBLE_VERSION",
    "Node",
    "ParseFailure",
    "Parser",
    "Query",
    "QueryCompileError",
    "QueryMatch",
    "QuerySyntaxError",
    "SitterError",
    "Tree",
    "TreeCursor",
    "TreeManager",
    "UnknownCapture",
    "UnknownField",
    "UnknownNodeType",
    "VersionMismatch",
    "check_version",
    "compute_edit",
]
