# SPDX-License-Identifier: MIT
"""compile_commands.json generator for IDE integration.

Generates a compile_commands.json file that IDEs and tools like
clangd and clang-tidy can use for code intelligence.
"""

from __future__ import annotations

import json
import logging
import os
import shlex
from pathlib import Path
from typing import TYPE_CHECKING, Any

from vsccc.core.item import LIST_SEPARATOR
from vsccc.generators.generator import BaseGenerator

if TYPE_CHECKING:
    from vsccc.core.item import Item
    from vsccc.core.loader import Build

logger = logging.getLogger(__name__)

# Item types that produce an entry, and the language they are compiled as.
COMPILED_ITEM_TYPES = {"ClCompile": "c++", "ClInclude": "c++"}

LANGUAGE_STANDARDS = {
    "stdcpp14": "c++14",
    "stdcpp17": "c++17",
    "stdcpp20": "c++20",
    "stdcpplatest": "c++20",
}
DEFAULT_LANGUAGE_STANDARD = "c++14"


def _to_json_path(s: str) -> str:
    return s.replace("\\", "/")


class CompileCommandsGenerator(BaseGenerator):
    """Generator for compile_commands.json.

    Creates a JSON compilation database in the format expected by
    clang tools, IDEs, and language servers.

    Format:
        [
            {
                "directory": "/path/to/solution",
                "file": "app/src/main.cpp",
                "command": "clang -c -xc++ -Iapp/inc -DDEBUG app/src/main.cpp"
            },
            ...
        ]

    Example:
        generator = CompileCommandsGenerator()
        generator.generate(build)
        # Creates <solution dir>/compile_commands.json
    """

    COMPILER = "clang"

    def __init__(self) -> None:
        super().__init__("compile_commands")

    def _generate_impl(self, build: Build, output_dir: Path) -> Path:
        """Generate compile_commands.json.

        Args:
            build: Loaded build to generate for.
            output_dir: Directory to write compile_commands.json to.
        """
        output_file = output_dir / "compile_commands.json"
        commands = self.collect_entries(build)

        with open(output_file, "w") as f:
            json.dump(commands, f, indent=2)
            f.write("\n")

        logger.info("Wrote %d entries to %s", len(commands), output_file)
        return output_file

    def collect_entries(self, build: Build) -> list[dict[str, Any]]:
        """Build the compilation database entries for a build."""
        base_dir = str(build.root_dir)
        return [
            self._make_entry(item, base_dir)
            for item in build.items
            if item.type in COMPILED_ITEM_TYPES
        ]

    def _make_entry(self, item: Item, base_dir: str) -> dict[str, Any]:
        """Create a compile_commands.json entry for an item."""
        file_path = self._relative_path(base_dir, item.full_path)
        return {
            "directory": _to_json_path(base_dir),
            "file": file_path,
            "command": self._format_command(item, base_dir, file_path),
        }

    def _format_command(self, item: Item, base_dir: str, file_path: str) -> str:
        """Format the compiler invocation for an item.

        The command is formatted as a shell command string with proper quoting.
        """
        language = COMPILED_ITEM_TYPES[item.type]
        if item.properties.get("CompileAs") == "CompileAsC":
            language = "c"

        parts: list[str] = [self.COMPILER, "-c", f"-x{language}"]

        for name, value in item.properties.items():
            name = name.lower()
            if name == "additionalincludedirectories":
                for inc in value.split(LIST_SEPARATOR):
                    if inc:
                        parts.append(f"-I{self._relative_path(base_dir, inc)}")
            elif name == "languagestandard":
                std = LANGUAGE_STANDARDS.get(value, DEFAULT_LANGUAGE_STANDARD)
                parts.append(f"-std={std}")
            elif name == "preprocessordefinitions":
                for define in value.split(LIST_SEPARATOR):
                    if define:
                        parts.append(f"-D{_to_json_path(define)}")
            elif name == "treatwarningaserror":
                if value.lower() == "true":
                    parts.append("-Werror")

        parts.append(file_path)

        # Quote each part for shell, then join
        return " ".join(shlex.quote(p) for p in parts)

    @staticmethod
    def _relative_path(base_dir: str, path: str) -> str:
        """Make a path under base_dir relative to it, with forward slashes."""
        base = os.path.normcase(base_dir.rstrip("\\/"))
        if os.path.normcase(path).startswith(base + os.sep):
            path = path[len(base) + 1 :]
        return _to_json_path(path)
