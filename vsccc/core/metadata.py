# SPDX-License-Identifier: MIT
"""Well-known item metadata.

Every item exposes a fixed set of derived values computed from its
identity (the path given in the project file) and the directory of the
project that owns it. These are the values available through
``%(Name)`` substitutions. The set is closed: asking for any other name
is an error.
"""

from __future__ import annotations

import os
from collections.abc import Callable
from pathlib import PurePath

from vsccc.core.errors import UnknownMetadataError
from vsccc.util.filesystem import FileSystem, to_native

_default_filesystem = FileSystem()


def _with_trailing_sep(path: str) -> str:
    if path and not path.endswith(os.sep):
        return path + os.sep
    return path


def full_path(identity: str, project_dir: str) -> str:
    return os.path.normpath(os.path.join(project_dir, to_native(identity)))


def root_dir(project_dir: str) -> str:
    return PurePath(project_dir).anchor


def _directory(identity: str, project_dir: str) -> str:
    parent = os.path.dirname(full_path(identity, project_dir))
    root = root_dir(project_dir)
    if parent.startswith(root):
        parent = parent[len(root) :]
    return _with_trailing_sep(parent)


def _filename(identity: str, project_dir: str) -> str:
    return os.path.splitext(os.path.basename(to_native(identity)))[0]


def _extension(identity: str, project_dir: str) -> str:
    return os.path.splitext(to_native(identity))[1]


def _relative_dir(identity: str, project_dir: str) -> str:
    return _with_trailing_sep(os.path.dirname(to_native(identity)))


# name (lower case) -> function(identity, project_dir, filesystem)
_METADATA: dict[str, Callable[[str, str, FileSystem], str]] = {
    "fullpath": lambda i, d, fs: full_path(i, d),
    "rootdir": lambda i, d, fs: root_dir(d),
    "filename": lambda i, d, fs: _filename(i, d),
    "extension": lambda i, d, fs: _extension(i, d),
    "relativedir": lambda i, d, fs: _relative_dir(i, d),
    "directory": lambda i, d, fs: _directory(i, d),
    "recursivedir": lambda i, d, fs: _directory(i, d),
    "identity": lambda i, d, fs: i,
    "modifiedtime": lambda i, d, fs: fs.modified_time(full_path(i, d)),
    "createdtime": lambda i, d, fs: fs.created_time(full_path(i, d)),
    "accessedtime": lambda i, d, fs: fs.accessed_time(full_path(i, d)),
}

WELL_KNOWN_METADATA = (
    "FullPath",
    "RootDir",
    "Filename",
    "Extension",
    "RelativeDir",
    "Directory",
    "RecursiveDir",
    "Identity",
    "ModifiedTime",
    "CreatedTime",
    "AccessedTime",
)


def get_metadata(
    name: str,
    identity: str,
    project_dir: str,
    *,
    filesystem: FileSystem | None = None,
    location: str | None = None,
) -> str:
    """Compute one well-known metadata value for an item.

    Args:
        name: Metadata name, matched case-insensitively.
        identity: The item's path as written in the project.
        project_dir: Absolute directory of the owning project.
        filesystem: Source of file timestamps (default: local disk).
        location: Location reported if the name is unknown.

    Returns:
        The metadata value.

    Raises:
        UnknownMetadataError: If name is not a well-known metadata name.
    """
    compute = _METADATA.get(name.lower())
    if compute is None:
        raise UnknownMetadataError(name, location)
    return compute(identity, project_dir, filesystem or _default_filesystem)
