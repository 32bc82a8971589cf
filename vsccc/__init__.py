# SPDX-License-Identifier: MIT
"""
vsccc: compile_commands.json from Visual Studio projects.

vsccc reads a Visual Studio solution or C++ project, resolves its
property groups, item definitions and items the way the build would,
and writes a compilation database for clang-based tooling.
"""

from __future__ import annotations

__version__ = "0.1.0"

# Re-export commonly used classes for convenient imports
# These imports must be after __version__ is defined but we use noqa to allow it
from vsccc.core.errors import VscccError  # noqa: E402
from vsccc.core.loader import Build, load_build  # noqa: E402
from vsccc.core.namespace import Namespace  # noqa: E402
from vsccc.core.project import ProjectModel, load_project  # noqa: E402
from vsccc.generators.compile_commands import CompileCommandsGenerator  # noqa: E402

# Public API exports
__all__ = [
    # Version
    "__version__",
    # Loading
    "Build",
    "load_build",
    "load_project",
    "Namespace",
    "ProjectModel",
    # Errors
    "VscccError",
    # Generators
    "CompileCommandsGenerator",
]
