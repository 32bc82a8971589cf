# SPDX-License-Identifier: MIT
"""Generator protocol for output file generation.

Generators take a loaded Build and write a file describing it for
other tools (e.g., a compilation database).
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from vsccc.core.errors import OutputError

if TYPE_CHECKING:
    from vsccc.core.loader import Build


@runtime_checkable
class Generator(Protocol):
    """Protocol for output generators.

    A Generator takes a loaded Build and writes its output to a
    directory, returning the path of the file written.
    """

    @property
    def name(self) -> str:
        """Generator name (e.g., 'compile_commands')."""
        ...

    def generate(self, build: Build, output_dir: Path | None = None) -> Path:
        """Generate output for a build.

        Args:
            build: The loaded build to generate for.
            output_dir: Directory to write to (default: build.root_dir).

        Returns:
            Path of the generated file.
        """
        ...


class BaseGenerator:
    """Base class for generators with common functionality."""

    def __init__(self, name: str) -> None:
        """Initialize a generator.

        Args:
            name: Generator name.
        """
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def generate(self, build: Build, output_dir: Path | None = None) -> Path:
        """Generate output, creating output_dir if needed.

        Raises:
            OutputError: If the directory or file cannot be written.
        """
        out = Path(output_dir) if output_dir is not None else build.root_dir
        try:
            out.mkdir(parents=True, exist_ok=True)
            return self._generate_impl(build, out)
        except OSError as e:
            raise OutputError(f"failed to write {self.name}: {e}", str(out)) from e

    def _generate_impl(self, build: Build, output_dir: Path) -> Path:
        """Write the output. Subclasses must implement."""
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r})"
