from __future__ import annotations

import tree_sitter
from tree_sitter import Point
from typing import Optional, TYPE_CHECKING

from .node import Node, _TraversalCursor

if TYPE_CHECKING:
    from .cursor import TreeCursor
    from .edits import InputEdit


class Tree:
    """One parse result plus the source bytes it was parsed from

    The tree is the only owner of the engine's parse result. Every Node and
    TreeCursor derived from it keeps a reference back to it, so the parse
    result can't go away while any of them are still around.

    Once `edit` has been called the node offsets describe the edited document
    while `source` still holds the old bytes, so text access is switched off.
    """

    def __init__(self, tree: tree_sitter.Tree, source: bytes):
        self._tree: tree_sitter.Tree = tree
        self._source: bytes = source
        self.edited: bool = False
        self._traversal: _TraversalCursor = _TraversalCursor()

    @property
    def root_node(self) -> Node:
        return Node(self._tree.root_node, self)

    @property
    def text(self) -> Optional[bytes]:
        """The source for this tree, or None if the tree has been edited"""
        if self.edited:
            return None
        return self._source

    def walk(self) -> TreeCursor:
        """Get a cursor positioned at the root of this tree"""
        from .cursor import TreeCursor

        return TreeCursor(self._tree.root_node, self)

    def edit(
        self,
        start_byte: int,
        old_end_byte: int,
        new_end_byte: int,
        start_point: Point | tuple[int, int],
        old_end_point: Point | tuple[int, int],
        new_end_point: Point | tuple[int, int],
    ):
        """Shift the tree's offsets to account for a change to the source

        Each edit must be given in the coordinates that were valid right
        after the previous edit. Nothing is re-parsed until the tree is
        handed back to `Parser.parse` as the old tree.

        Args:
            start_byte: Byte offset where the change started
            old_end_byte: Byte offset where the change ended (before change)
            new_end_byte: Byte offset where the change ends (after change)
            start_point: (row, column) where the change started
            old_end_point: (row, column) where the change ended (before change)
            new_end_point: (row, column) where the change ends (after change)
        """
        self._tree.edit(
            start_byte=start_byte,
            old_end_byte=old_end_byte,
            new_end_byte=new_end_byte,
            start_point=tuple(start_point),
            old_end_point=tuple(old_end_point),
            new_end_point=tuple(new_end_point),
        )
        self.edited = True

    def apply(self, edit: InputEdit):
        """Apply an already computed edit. See `edit`"""
        self.edit(**edit.as_kwargs())

    def __repr__(self):
        state = "edited" if self.edited else "unedited"
        return f"<Tree root={self._tree.root_node.type}, {state}>"
