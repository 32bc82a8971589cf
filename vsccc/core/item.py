# SPDX-License-Identifier: MIT
"""Items: the source files listed in a project.

An Item has a type (the element name, e.g. ``ClCompile``), an identity
(the ``Include`` path) and a property table. Items of one type start out
borrowing the type's default table from the enclosing item definitions;
the first write to an item's properties gives that item a private copy.
Property names are case-insensitive.
"""

from __future__ import annotations

import re
from collections.abc import Mapping, MutableMapping
from types import MappingProxyType

from vsccc.core.metadata import full_path, get_metadata
from vsccc.core.namespace import Namespace
from vsccc.util.filesystem import FileSystem

# Property lists are semicolon separated.
LIST_SEPARATOR = ";"

_EXTERNAL_INCLUDE = re.compile(r"/external:I", re.IGNORECASE)


class Item:
    """One entry of an item group.

    Attributes:
        type: Item type (element name).
        identity: Path from the Include attribute; relative paths are
            relative to project_dir.
        project_dir: Absolute directory of the owning project (set when
            the project's items are resolved).
    """

    __slots__ = ("type", "identity", "project_dir", "_properties", "_owns_properties")

    def __init__(
        self,
        type: str,
        identity: str,
        defaults: Mapping[str, str] | None = None,
        *,
        project_dir: str = "",
    ) -> None:
        """Create an item.

        Args:
            type: Item type.
            identity: Unresolved Include path.
            defaults: Shared default properties for the item type. They are
                borrowed, not copied, until the item is given its own values.
            project_dir: Directory of the owning project.
        """
        self.type = type
        self.identity = identity
        self.project_dir = project_dir
        if defaults is None:
            self._properties: Mapping[str, str] = Namespace()
            self._owns_properties = True
        else:
            self._properties = defaults
            self._owns_properties = False

    @property
    def properties(self) -> Mapping[str, str]:
        """Read-only view of the item's properties."""
        if isinstance(self._properties, MappingProxyType):
            return self._properties
        return MappingProxyType(self._properties)  # type: ignore[arg-type]

    @property
    def owns_properties(self) -> bool:
        """True once the item has a private property table."""
        return self._owns_properties

    def shares_properties_with(self, other: Item) -> bool:
        return self._properties is other._properties

    def _own(self) -> MutableMapping[str, str]:
        if not self._owns_properties:
            self._properties = Namespace(self._properties)
            self._owns_properties = True
        return self._properties  # type: ignore[return-value]

    def set_property(self, name: str, value: str) -> None:
        self._own()[name] = value

    def remove_property(self, name: str) -> None:
        if name in self._properties:
            del self._own()[name]

    def metadata(self, name: str, *, filesystem: FileSystem | None = None) -> str:
        """Get a well-known metadata value (FullPath, Filename, ...)."""
        return get_metadata(
            name, self.identity, self.project_dir, filesystem=filesystem
        )

    @property
    def full_path(self) -> str:
        return full_path(self.identity, self.project_dir)

    def convert_external_include_paths(self) -> None:
        """Move ``/external:I <dir>`` options into the include directories.

        ``AdditionalOptions: /external:I "c:\\sdk inc" /W4`` becomes
        ``AdditionalOptions: /W4`` with ``c:\\sdk inc`` prepended to
        ``AdditionalIncludeDirectories``.
        """
        options = self._properties.get("AdditionalOptions")
        if options is None or not _EXTERNAL_INCLUDE.search(options):
            return

        directories: list[str] = []
        match = _EXTERNAL_INCLUDE.search(options)
        while match:
            directory, end = _next_word(options, match.end())
            directories.append(directory)
            options = options[: match.start()] + options[end:]
            match = _EXTERNAL_INCLUDE.search(options, match.start())

        includes = self._properties.get("AdditionalIncludeDirectories", "")
        # Each directory is prepended in turn, so the last one ends up first.
        for directory in directories:
            includes = directory + LIST_SEPARATOR + includes if includes else directory
        self.set_property("AdditionalIncludeDirectories", includes)

        options = options.strip()
        if options:
            self.set_property("AdditionalOptions", options)
        else:
            self.remove_property("AdditionalOptions")

    def __repr__(self) -> str:
        return f"Item({self.type!r}, {self.identity!r})"


def _next_word(s: str, pos: int) -> tuple[str, int]:
    """Return the next whitespace-delimited or double-quoted word at pos.

    Returns:
        Tuple of (word, index just past the word).
    """
    while pos < len(s) and s[pos].isspace():
        pos += 1
    if pos < len(s) and s[pos] == '"':
        end = s.find('"', pos + 1)
        if end == -1:
            return s[pos + 1 :], len(s)
        return s[pos + 1 : end], end + 1
    end = pos
    while end < len(s) and not s[end].isspace():
        end += 1
    return s[pos:end], end
