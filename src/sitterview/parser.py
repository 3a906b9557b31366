from __future__ import annotations

import logging
import tree_sitter
from typing import Any, Optional

from .constants import ENC
from .exceptions import InvalidArgument, ParseFailure
from .language import Language, check_version
from .tree import Tree

logger = logging.getLogger(__name__)


class Parser:
    """Turns source bytes into Trees for one bound language

    A parser is meant to be created once and reused for many parses.
    """

    def __init__(self, language: Optional[Any] = None):
        self._parser = tree_sitter.Parser()
        self._language: Optional[Language] = None
        if language is not None:
            self.set_language(language)

    @property
    def language(self) -> Optional[Language]:
        return self._language

    def set_language(self, language: Any):
        """Bind the parser to a language, replacing the previous one

        Args:
            language: A Language, or anything a Language can wrap

        Raises:
            VersionMismatch: The language's version isn't supported. The
                previously bound language stays in place.
        """
        if not isinstance(language, Language):
            language = Language(language)
        check_version(language)
        self._parser.language = language.handle
        self._language = language
        logger.debug("Parser bound to %r", language)

    def parse(
        self,
        source: bytes,
        old_tree: Optional[Tree] = None,
        encoding: str = ENC,
    ) -> Tree:
        """Parse source code into a new Tree

        Args:
            source: The raw source bytes
            old_tree: A previously parsed (and usually edited) tree to reuse.
                It's left untouched and stays usable.
            encoding: How the engine should decode `source`, "utf8" or "utf16"

        Raises:
            InvalidArgument: `source` isn't bytes or `old_tree` isn't a Tree
            ParseFailure: The engine didn't produce a tree
        """
        if not isinstance(source, bytes):
            raise InvalidArgument("First argument to parse must be bytes")
        if old_tree is not None and not isinstance(old_tree, Tree):
            raise InvalidArgument("Second argument to parse must be a Tree")
        if self._language is None:
            raise ParseFailure("Parsing failed: no language has been set")

        engine_old = None if old_tree is None else old_tree._tree
        try:
            if engine_old is None:
                new_tree = self._parser.parse(source, encoding=encoding)
            else:
                new_tree = self._parser.parse(source, engine_old, encoding=encoding)
        except ValueError as err:
            raise ParseFailure(f"Parsing failed: {err}") from err

        if new_tree is None:
            raise ParseFailure("Parsing failed")

        logger.debug(
            "Parsed %d bytes (%s)",
            len(source),
            "incremental" if engine_old is not None else "full",
        )
        return Tree(new_tree, source)
