# SPDX-License-Identifier: MIT
"""Loading a solution or project into a Build.

The Build is what generators consume: the resolved items of every
project, in order, together with the macros they were resolved with.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from vsccc.config import seed_macros
from vsccc.core.errors import ProjectLoadError
from vsccc.core.item import Item
from vsccc.core.namespace import Namespace
from vsccc.core.project import ProjectModel, load_project
from vsccc.core.solution import load_solution
from vsccc.util.filesystem import FileSystem

logger = logging.getLogger(__name__)

SOLUTION_SUFFIX = ".sln"
PROJECT_PATTERNS = ("*.?sproj", "*.vcxproj")


@dataclass
class Build:
    """Everything loaded from one solution or project.

    Attributes:
        root_dir: Directory of the solution (or lone project); generated
            files are written here by default.
        path: The solution or project file that was loaded.
        macros: The shared macro table after loading.
        projects: The loaded projects, in order.
    """

    root_dir: Path
    path: Path
    macros: Namespace
    projects: list[ProjectModel] = field(default_factory=list)

    @property
    def items(self) -> list[Item]:
        """All items of all projects, in project order."""
        return [item for project in self.projects for item in project.items]


def find_project_in_directory(
    directory: Path | str,
    *,
    filesystem: FileSystem | None = None,
) -> Path:
    """Find the solution, or failing that the project, in a directory.

    Raises:
        ProjectLoadError: If there are several solutions, or no solution
            and not exactly one project.
    """
    fs = filesystem or FileSystem()
    location = str(directory)

    solutions = fs.list_files(directory, f"*{SOLUTION_SUFFIX}")
    if len(solutions) == 1:
        return solutions[0]
    if len(solutions) > 1:
        raise ProjectLoadError("multiple solutions found in directory", location)

    projects = sorted(
        {p for pattern in PROJECT_PATTERNS for p in fs.list_files(directory, pattern)}
    )
    if not projects:
        raise ProjectLoadError("no projects found in directory", location)
    if len(projects) > 1:
        raise ProjectLoadError("multiple projects found in directory", location)
    return projects[0]


def load_build(
    path: Path | str | None = None,
    properties: Mapping[str, str] | None = None,
    *,
    macros: Namespace | None = None,
    filesystem: FileSystem | None = None,
) -> Build:
    """Load a solution, a project, or the one found in a directory.

    Args:
        path: Solution, project or directory (default: current directory).
        properties: Extra initial macro values, applied over the defaults.
        macros: Starting macro table to use instead of the defaults.
        filesystem: File-system capability.

    Returns:
        The loaded Build.

    Raises:
        VscccError: If anything fails to load; nothing partial is returned.
    """
    fs = filesystem or FileSystem()
    target = Path(path) if path is not None else Path.cwd()
    if target.is_dir():
        target = find_project_in_directory(target, filesystem=fs)
    if not fs.exists(target):
        raise ProjectLoadError("specified project does not exist", str(target))

    target = target.absolute()
    root_dir = target.parent

    if macros is None:
        macros = seed_macros([properties] if properties else [])
    elif properties:
        macros.update(properties)
    macros["SolutionDir"] = str(root_dir) + os.sep

    if target.suffix.lower() == SOLUTION_SUFFIX:
        projects = load_solution(target, macros, filesystem=fs)
    else:
        macros["ProjectName"] = target.stem
        projects = [load_project(target, macros, filesystem=fs)]

    for project in projects:
        for item in project.items:
            item.convert_external_include_paths()

    return Build(root_dir=root_dir, path=target, macros=macros, projects=projects)
