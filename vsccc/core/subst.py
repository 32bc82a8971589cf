# SPDX-License-Identifier: MIT
"""Macro and metadata substitution engine for vsccc.

Two kinds of token are understood:
- Macros: ``$(Name)``, looked up in the project's macro table
- Item metadata: ``%(Name)``, looked up on a single item

Both share one algorithm, parameterized by the opening marker and a
lookup function:
- A token's name may itself contain tokens of the same kind, which are
  expanded first: ``$(Out$(Kind))`` looks up ``OutLib`` when Kind is Lib.
- Looked-up values are expanded again at each use, so a macro may refer
  to other macros.
- A token that never closes is an error. If another token opens inside
  it before the end of the text, the tokens interleave and that is
  reported as unsupported nesting.
- A name that expands back into itself is a circular reference.

Example:
    macros = Namespace({"A": "x", "B": "$(A)y"})
    expand_macros("$(B)z", macros)   # "xyz"
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import TYPE_CHECKING

from vsccc.core.errors import (
    CircularReferenceError,
    MissingMacroError,
    NestedSubstitutionError,
    UnterminatedSubstitutionError,
)
from vsccc.core.item import LIST_SEPARATOR
from vsccc.core.metadata import get_metadata

if TYPE_CHECKING:
    from vsccc.core.item import Item
    from vsccc.util.filesystem import FileSystem

MACRO_PREFIX = "$("
METADATA_PREFIX = "%("
CLOSE = ")"

Lookup = Callable[[str], str]


# =============================================================================
# Core substitution
# =============================================================================


def expand(
    text: str,
    prefix: str,
    lookup: Lookup,
    *,
    location: str | None = None,
) -> str:
    """Expand every token opened by prefix in text.

    Args:
        text: Text to expand.
        prefix: Opening marker, MACRO_PREFIX or METADATA_PREFIX.
        lookup: Returns the raw value for a name; raises for unknown names.
        location: Location reported in errors.

    Returns:
        The text with all tokens of this kind replaced.
    """
    return _expand_all(text, prefix, lookup, (), location)


def _expand_all(
    text: str,
    prefix: str,
    lookup: Lookup,
    expanding: tuple[str, ...],
    location: str | None,
) -> str:
    parts: list[str] = []
    pos = 0
    start = text.find(prefix)
    while start != -1:
        value, end = _expand_token(text, start, prefix, lookup, expanding, location)
        parts.append(text[pos:start])
        parts.append(value)
        pos = end
        start = text.find(prefix, pos)
    parts.append(text[pos:])
    return "".join(parts)


def _expand_token(
    text: str,
    start: int,
    prefix: str,
    lookup: Lookup,
    expanding: tuple[str, ...],
    location: str | None,
) -> tuple[str, int]:
    """Expand the token opened at start.

    Returns:
        Tuple of (expanded value, index just past the close marker).
    """
    close = _find_close(text, start, prefix, location)
    raw_name = text[start + len(prefix) : close]
    name = _expand_all(raw_name, prefix, lookup, expanding, location)

    key = name.lower()
    if key in expanding:
        chain = list(expanding) + [key]
        raise CircularReferenceError(chain[chain.index(key) :], location)

    value = _expand_all(lookup(name), prefix, lookup, expanding + (key,), location)
    return value, close + len(CLOSE)


def _find_close(text: str, start: int, prefix: str, location: str | None) -> int:
    """Find the close marker matching the token opened at start.

    Tokens of the same kind opened inside the name are skipped over
    along with their own close markers.
    """
    depth = 0
    nested = False
    pos = start + len(prefix)
    while pos < len(text):
        if text.startswith(prefix, pos):
            depth += 1
            nested = True
            pos += len(prefix)
            continue
        if text.startswith(CLOSE, pos):
            if depth == 0:
                return pos
            depth -= 1
        pos += 1

    if nested:
        raise NestedSubstitutionError(text[start:], location)
    raise UnterminatedSubstitutionError(text[start:], location)


# =============================================================================
# Macros and metadata
# =============================================================================


def expand_macros(
    text: str,
    macros: Mapping[str, str],
    *,
    location: str | None = None,
) -> str:
    """Expand ``$(Name)`` macros.

    Raises:
        MissingMacroError: If a macro is not defined.
    """

    def lookup(name: str) -> str:
        try:
            return macros[name]
        except KeyError:
            raise MissingMacroError(name, location) from None

    return expand(text, MACRO_PREFIX, lookup, location=location)


def expand_metadata(
    text: str,
    item: Item,
    property_name: str | None = None,
    *,
    filesystem: FileSystem | None = None,
    location: str | None = None,
) -> str:
    """Expand ``%(Name)`` item metadata.

    A reference to property_name itself expands to nothing. This is how
    a property extends the value it inherits:
    ``<AdditionalIncludeDirectories>inc;%(AdditionalIncludeDirectories)``.

    Raises:
        UnknownMetadataError: If a name is not well-known metadata.
    """
    excluded = property_name.lower() if property_name else None

    def lookup(name: str) -> str:
        if name.lower() == excluded:
            return ""
        return get_metadata(
            name,
            item.identity,
            item.project_dir,
            filesystem=filesystem,
            location=location,
        )

    return expand(text, METADATA_PREFIX, lookup, location=location)


def expand_property_value(
    value: str,
    item: Item,
    property_name: str,
    macros: Mapping[str, str],
    *,
    filesystem: FileSystem | None = None,
    location: str | None = None,
) -> str:
    """Fully resolve one property value of an item.

    Each list element is trimmed and has its metadata expanded, then its
    macros (inherited values often carry macros, so macros go last).
    Empty elements are dropped.
    """
    resolved: list[str] = []
    for element in value.split(LIST_SEPARATOR):
        element = expand_metadata(
            element.strip(),
            item,
            property_name,
            filesystem=filesystem,
            location=location,
        )
        element = expand_macros(element, macros, location=location)
        if element:
            resolved.append(element)
    return LIST_SEPARATOR.join(resolved)
