# SPDX-License-Identifier: MIT
"""Reading solution files.

A solution lists its projects one per line:

    Project("{8BC9CEB8-8B4A-11D0-8D11-00A0C91BC942}") = "app", "app\\app.vcxproj", "{...}"

Projects are loaded in the order they are listed, with the ProjectName
macro set to each project's name in turn.
"""

from __future__ import annotations

import logging
import os
import re
from collections.abc import MutableMapping
from dataclasses import dataclass
from pathlib import Path

from vsccc.core.errors import (
    MissingProjectError,
    ProjectLoadError,
    UnsupportedProjectTypeError,
)
from vsccc.core.project import ProjectModel, load_project
from vsccc.util.filesystem import FileSystem, to_native

logger = logging.getLogger(__name__)

# https://stackoverflow.com/questions/10802198/visual-studio-project-type-guids
SOLUTION_FOLDER_GUID = "{2150E333-8FDC-42A3-9474-1A3956D46DE8}"
CPP_PROJECT_GUID = "{8BC9CEB8-8B4A-11D0-8D11-00A0C91BC942}"

_PROJECT_LINE = re.compile(
    r'^Project\("(?P<type>[^"]*)"\)\s*=\s*"(?P<name>[^"]*)"\s*,\s*"(?P<path>[^"]*)"'
)


@dataclass(frozen=True)
class SolutionProject:
    """A project listed in a solution.

    Attributes:
        name: Project name as given in the solution.
        path: Absolute path of the project file.
    """

    name: str
    path: Path


def read_solution(
    path: Path | str,
    *,
    filesystem: FileSystem | None = None,
) -> list[SolutionProject]:
    """List the C++ projects of a solution, in solution order.

    Raises:
        ProjectLoadError: If the solution cannot be read or is not UTF-8.
        MissingProjectError: If a listed project file does not exist.
        UnsupportedProjectTypeError: If a project is neither a C++ project
            nor a solution folder.
    """
    fs = filesystem or FileSystem()
    sln_path = Path(path).absolute()
    location = str(sln_path)

    try:
        lines = fs.read_lines(sln_path)
    except (OSError, UnicodeDecodeError) as e:
        raise ProjectLoadError(f"failed to load solution: {e}", location) from e

    projects: list[SolutionProject] = []
    for line in lines:
        match = _PROJECT_LINE.match(line)
        if match is None:
            continue

        type_guid = match.group("type").upper()
        name = match.group("name")
        if type_guid == SOLUTION_FOLDER_GUID:
            logger.debug("Skipping solution folder %s", name)
            continue
        if type_guid != CPP_PROJECT_GUID:
            raise UnsupportedProjectTypeError(match.group("type"), location)

        project_path = Path(
            os.path.normpath(sln_path.parent / to_native(match.group("path")))
        )
        if not fs.exists(project_path):
            raise MissingProjectError(str(project_path), location)
        projects.append(SolutionProject(name, project_path))

    return projects


def load_solution(
    path: Path | str,
    macros: MutableMapping[str, str],
    *,
    filesystem: FileSystem | None = None,
) -> list[ProjectModel]:
    """Load every project of a solution.

    Args:
        path: Path to the solution file.
        macros: Shared macro table. Its ProjectName entry is set to each
            project's name before that project is loaded; nothing else in
            it is changed.
        filesystem: File-system capability.

    Returns:
        The loaded projects, in solution order.
    """
    models: list[ProjectModel] = []
    for project in read_solution(path, filesystem=filesystem):
        macros["ProjectName"] = project.name
        models.append(load_project(project.path, macros, filesystem=filesystem))
    return models
