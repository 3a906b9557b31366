from __future__ import annotations

import tree_sitter
from typing import Optional, TYPE_CHECKING

from .node import Node

if TYPE_CHECKING:
    from .tree import Tree


class TreeCursor:
    """A stateful walker over a Tree

    Moving the cursor is a constant-ish step in the engine's own tree, which
    is much cheaper than re-deriving nodes from the root. The Node for the
    current position is only built when asked for, and thrown away whenever
    the cursor actually moves.
    """

    def __init__(self, node: tree_sitter.Node, tree: Tree):
        self._cursor: tree_sitter.TreeCursor = node.walk()
        self._tree: Tree = tree
        self._node: Optional[Node] = None

    @property
    def tree(self) -> Tree:
        return self._tree

    @property
    def node(self) -> Node:
        """The node at the cursor's current position"""
        if self._node is None:
            self._node = Node(self._cursor.node, self._tree)
        return self._node

    def current_field_name(self) -> Optional[str]:
        """Get the field name of the current node within its parent

        Returns None if the current node isn't held in a named field
        """
        return self._cursor.field_name

    def _moved(self, result: bool) -> bool:
        if result:
            self._node = None
        return result

    def goto_parent(self) -> bool:
        """If the current node isn't the root, move to its parent and return True"""
        return self._moved(self._cursor.goto_parent())

    def goto_first_child(self) -> bool:
        """If the current node has children, move to the first one and return True"""
        return self._moved(self._cursor.goto_first_child())

    def goto_next_sibling(self) -> bool:
        """If the current node has a next sibling, move to it and return True"""
        return self._moved(self._cursor.goto_next_sibling())

    def __repr__(self):
        return f"<TreeCursor node={self.node!r}>"
