from __future__ import annotations

import threading
import tree_sitter
from tree_sitter import Point
from typing import Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .cursor import TreeCursor
    from .tree import Tree


class _TraversalCursor:
    """One engine cursor shared by every Node of a Tree for collecting children

    It's created on first use, then reset onto each node before it walks.
    The engine cursor holds its tree, so each Tree owns its own and the
    cursor goes away with the Tree.
    """

    def __init__(self):
        self._cursor: Optional[tree_sitter.TreeCursor] = None
        self.lock = threading.Lock()

    def children(self, node: tree_sitter.Node) -> list[tree_sitter.Node]:
        with self.lock:
            if self._cursor is None:
                self._cursor = node.walk()
            else:
                self._cursor.reset(node)

            cursor = self._cursor
            if not cursor.goto_first_child():
                return []
            out = [cursor.node]
            while cursor.goto_next_sibling():
                out.append(cursor.node)
            return out


class Node:
    """A handle to one syntax element of a Tree

    A Node only holds the engine's position and a reference to its Tree.
    Two nodes are equal when they point at the same position, no matter how
    each one was reached.
    """

    __slots__: tuple[str, ...] = ("_node", "_tree", "_children")

    def __init__(self, node: tree_sitter.Node, tree: Tree):
        self._node: tree_sitter.Node = node
        self._tree: Tree = tree
        self._children: Optional[list[Node]] = None

    @property
    def tree(self) -> Tree:
        return self._tree

    @property
    def type(self) -> str:
        return self._node.type

    @property
    def is_named(self) -> bool:
        return self._node.is_named

    @property
    def is_missing(self) -> bool:
        """Was this node inserted by the parser during error recovery"""
        return self._node.is_missing

    @property
    def has_changes(self) -> bool:
        """Was this node touched by an edit since it was parsed"""
        return self._node.has_changes

    @property
    def has_error(self) -> bool:
        """Does this node or any of its descendants contain an error"""
        return self._node.has_error

    @property
    def start_byte(self) -> int:
        return self._node.start_byte

    @property
    def end_byte(self) -> int:
        return self._node.end_byte

    @property
    def start_point(self) -> Point:
        return self._node.start_point

    @property
    def end_point(self) -> Point:
        return self._node.end_point

    @property
    def children(self) -> list[Node]:
        """The immediate children in document order

        Collected once with the tree's traversal cursor, then cached
        """
        if self._children is None:
            self._children = [
                Node(child, self._tree)
                for child in self._tree._traversal.children(self._node)
            ]
        return self._children

    @property
    def child_count(self) -> int:
        return self._node.child_count

    @property
    def named_child_count(self) -> int:
        return self._node.named_child_count

    def _wrap(self, node: Optional[tree_sitter.Node]) -> Optional[Node]:
        if node is None:
            return None
        return Node(node, self._tree)

    @property
    def next_sibling(self) -> Optional[Node]:
        return self._wrap(self._node.next_sibling)

    @property
    def prev_sibling(self) -> Optional[Node]:
        return self._wrap(self._node.prev_sibling)

    @property
    def next_named_sibling(self) -> Optional[Node]:
        return self._wrap(self._node.next_named_sibling)

    @property
    def prev_named_sibling(self) -> Optional[Node]:
        return self._wrap(self._node.prev_named_sibling)

    @property
    def parent(self) -> Optional[Node]:
        return self._wrap(self._node.parent)

    def child_by_field_id(self, field_id: int) -> Optional[Node]:
        """Get the child held in the given field, or None if it isn't set"""
        return self._wrap(self._node.child_by_field_id(field_id))

    def child_by_field_name(self, name: str) -> Optional[Node]:
        """Get the child held in the named field, or None if it isn't set"""
        return self._wrap(self._node.child_by_field_name(name))

    @property
    def text(self) -> Optional[bytes]:
        """The source bytes covered by this node

        None if the owning tree has been edited
        """
        source = self._tree.text
        if source is None:
            return None
        return source[self._node.start_byte : self._node.end_byte]

    def walk(self) -> TreeCursor:
        """Get a cursor for walking the tree starting at this node"""
        from .cursor import TreeCursor

        return TreeCursor(self._node, self._tree)

    def sexp(self) -> str:
        """An S-expression of this node and its named descendants"""
        return str(self._node)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Node):
            return False
        return self._node == other._node

    def __ne__(self, other) -> bool:
        return not self == other

    def __hash__(self):
        return hash(self._node.id)

    def __repr__(self):
        start = tuple(self._node.start_point)
        end = tuple(self._node.end_point)
        kind = self._node.type if self._node.is_named else f'"{self._node.type}"'
        return f"<Node type={kind}, start_point={start}, end_point={end}>"
