from __future__ import annotations

import logging
from typing import Any, Optional

from .edits import compute_edit
from .node import Node
from .parser import Parser
from .tree import Tree

logger = logging.getLogger(__name__)


class TreeManager:
    """Manages a parse tree for a changing document with incremental updates

    This class owns the parser, the current tree and the source it was parsed
    from. Each update works out how the source changed, applies that edit to
    the current tree and re-parses only what's needed.
    """

    def __init__(self, language: Any):
        """Initialize the tree manager

        Args:
            language: The Language to use for parsing
        """
        self.parser = Parser(language)
        self.tree: Optional[Tree] = None
        self.source: bytes = b""

    def update(self, source: bytes) -> Optional[Tree]:
        """Bring the parse tree up to date with new document contents

        The current tree and source are only replaced once the new parse
        succeeds. If the source hasn't changed, nothing is re-parsed and the
        current tree is returned untouched.

        Args:
            source: The full new contents of the document

        Returns:
            The previous tree, if there was one. When the source changed it
            has had the edit applied, so its text is no longer available.
        """
        old_tree = self.tree
        if old_tree is None:
            # First parse - no old tree to pass
            new_tree = self.parser.parse(source)
        else:
            edit = compute_edit(self.source, source)
            if edit is None:
                return old_tree
            logger.debug(
                "Re-parsing bytes %d-%d (was %d-%d)",
                edit.start_byte,
                edit.new_end_byte,
                edit.start_byte,
                edit.old_end_byte,
            )
            # Edit a private copy so a failed parse leaves the current tree intact
            base = Tree(old_tree._tree.copy(), self.source)
            base.apply(edit)
            new_tree = self.parser.parse(source, base)
            old_tree.apply(edit)
        self.tree = new_tree
        self.source = source
        return old_tree

    def node_at_byte(self, byte_offset: int) -> Optional[Node]:
        """Get the deepest node that contains a byte offset

        Args:
            byte_offset: The byte offset in the document

        Returns:
            The Node at the given offset, or None if no tree exists
        """
        if self.tree is None:
            return None

        cursor = self.tree.walk()
        while cursor.goto_first_child():
            while cursor.node.end_byte <= byte_offset:
                if not cursor.goto_next_sibling():
                    break
            if not (cursor.node.start_byte <= byte_offset < cursor.node.end_byte):
                cursor.goto_parent()
                break
        return cursor.node

    @property
    def root_node(self) -> Optional[Node]:
        """Get the root node of the parse tree

        Returns:
            The root Node of the tree, or None if no tree exists
        """
        return self.tree.root_node if self.tree else None
