from __future__ import annotations

import tree_sitter
from typing import Any, Optional, TYPE_CHECKING

from .exceptions import InvalidArgument, VersionMismatch

if TYPE_CHECKING:
    from .query import Query


MIN_COMPATIBLE_VERSION: int = tree_sitter.MIN_COMPATIBLE_LANGUAGE_VERSION
CURRENT_VERSION: int = tree_sitter.LANGUAGE_VERSION


class Language:
    """A grammar the engine knows how to parse

    Wraps either a ready `tree_sitter.Language` or the raw handle that a
    grammar package hands out, e.g. `tree_sitter_python.language()`
    """

    def __init__(self, handle: Any, name: Optional[str] = None):
        if isinstance(handle, Language):
            handle = handle.handle
        if not isinstance(handle, tree_sitter.Language):
            try:
                handle = tree_sitter.Language(handle)
            except (TypeError, ValueError) as err:
                raise InvalidArgument(
                    f"Can't build a language from {handle!r}"
                ) from err
        self.handle: tree_sitter.Language = handle
        self._name = name

    @property
    def name(self) -> Optional[str]:
        if self._name is not None:
            return self._name
        return self.handle.name

    @property
    def version(self) -> int:
        """The ABI version the grammar was generated with"""
        return self.handle.abi_version

    def field_id_for_name(self, name: str) -> Optional[int]:
        """Get the numeric id of a field, or None if the grammar has no such field"""
        field_id = self.handle.field_id_for_name(name)
        if not field_id:
            return None
        return field_id

    def query(self, source: str) -> Query:
        """Compile a query against this language"""
        from .query import Query

        return Query(self, source)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Language):
            return False
        return self.handle == other.handle

    def __hash__(self):
        return hash(self.handle)

    def __repr__(self):
        return f"<Language name={self.name}, version={self.version}>"


def check_version(language: Language):
    """Make sure the engine can read the language's tables

    Raises:
        VersionMismatch: If the version is outside of
            [MIN_COMPATIBLE_VERSION, CURRENT_VERSION]
    """
    version = language.version
    if version < MIN_COMPATIBLE_VERSION or CURRENT_VERSION < version:
        raise VersionMismatch(version, MIN_COMPATIBLE_VERSION, CURRENT_VERSION)
