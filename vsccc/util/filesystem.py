# SPDX-License-Identifier: MIT
"""File-system access used while loading projects.

Everything that touches the disk during loading goes through a
FileSystem instance so tests can substitute fixed answers (timestamps in
particular).
"""

from __future__ import annotations

import os
from datetime import datetime
from pathlib import Path

# Same layout MSBuild uses for its time metadata, at microsecond precision.
TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S.%f"


def to_native(path: str) -> str:
    """Convert Windows separators in a project path to the host separator."""
    if os.sep == "\\":
        return path.replace("/", "\\")
    return path.replace("\\", os.sep)


class FileSystem:
    """Default file-system capability backed by the local disk."""

    def exists(self, path: Path | str) -> bool:
        return Path(path).is_file()

    def modified_time(self, path: Path | str) -> str:
        return self._stat_time(path, "st_mtime")

    def created_time(self, path: Path | str) -> str:
        # st_birthtime only exists on some platforms; st_ctime is the fallback.
        try:
            st = os.stat(path)
        except FileNotFoundError:
            return ""
        return _format_time(getattr(st, "st_birthtime", st.st_ctime))

    def accessed_time(self, path: Path | str) -> str:
        return self._stat_time(path, "st_atime")

    def list_files(self, directory: Path | str, pattern: str) -> list[Path]:
        """Return files in directory matching a glob pattern, sorted by name."""
        return sorted(p for p in Path(directory).glob(pattern) if p.is_file())

    def read_lines(self, path: Path | str) -> list[str]:
        # Solution files are usually written with a UTF-8 BOM.
        return Path(path).read_text(encoding="utf-8-sig").splitlines()

    def _stat_time(self, path: Path | str, attr: str) -> str:
        try:
            st = os.stat(path)
        except FileNotFoundError:
            return ""
        return _format_time(getattr(st, attr))


def _format_time(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime(TIMESTAMP_FORMAT)
