# SPDX-License-Identifier: MIT
"""Case-insensitive name lookup for macro tables."""

from __future__ import annotations

from collections.abc import Iterator, Mapping, MutableMapping


class Namespace(MutableMapping[str, str]):
    """Mapping from name to string value with case-insensitive keys.

    Keys are normalized to lower case for lookup; iteration yields the
    spelling used by the most recent assignment, in insertion order.

    Example:
        macros = Namespace({"Configuration": "Debug"})
        macros["configuration"]          # "Debug"
        macros["CONFIGURATION"] = "Release"
        list(macros)                     # ["CONFIGURATION"]
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str] | None = None) -> None:
        self._data: dict[str, tuple[str, str]] = {}
        if data:
            self.update(data)

    def __getitem__(self, key: str) -> str:
        return self._data[key.lower()][1]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key.lower()] = (key, value)

    def __delitem__(self, key: str) -> None:
        del self._data[key.lower()]

    def __contains__(self, key: object) -> bool:
        return isinstance(key, str) and key.lower() in self._data

    def __iter__(self) -> Iterator[str]:
        return (key for key, _ in self._data.values())

    def __len__(self) -> int:
        return len(self._data)

    def copy(self) -> Namespace:
        """Return an independent clone of this namespace."""
        clone = Namespace()
        clone._data = dict(self._data)
        return clone

    def __repr__(self) -> str:
        return f"Namespace({dict(self.items())!r})"
