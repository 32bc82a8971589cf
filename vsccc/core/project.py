# SPDX-License-Identifier: MIT
"""Building the item model of one project file.

A project file is walked once, top to bottom:

    <Project>
      <PropertyGroup Condition="...">       macros, in order
        <OutDir>$(SolutionDir)bin\\</OutDir>
      </PropertyGroup>
      <ItemDefinitionGroup Condition="...">  per-type property defaults
        <ClCompile>
          <AdditionalIncludeDirectories>inc</AdditionalIncludeDirectories>
        </ClCompile>
      </ItemDefinitionGroup>
      <ItemGroup>                            items
        <ClCompile Include="src\\main.cpp" />
      </ItemGroup>
    </Project>

Conditions see the macros defined so far, and an item takes the
defaults for its type that are in effect where the item appears. Once
the walk finishes, every item's identity and property values are
resolved.
"""

from __future__ import annotations

import logging
import os
import re
import xml.etree.ElementTree as ET
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from vsccc.core.conditions import evaluate_condition
from vsccc.core.item import Item
from vsccc.core.namespace import Namespace
from vsccc.core.subst import (
    CLOSE,
    METADATA_PREFIX,
    expand_macros,
    expand_property_value,
)
from vsccc.core.xmltree import (
    load_xml,
    node_attribute,
    node_children,
    node_name,
    node_text,
)
from vsccc.util.filesystem import FileSystem

logger = logging.getLogger(__name__)

ITEM_GROUP = "ItemGroup"
ITEM_DEFINITION_GROUP = "ItemDefinitionGroup"
PROPERTY_GROUP = "PropertyGroup"

# Item types that compile with another type's settings.
PROPERTY_DEFAULT_ALIASES = {"ClInclude": "ClCompile"}


class ProjectModel:
    """The resolved contents of one project file.

    Attributes:
        name: Project name (the ProjectName macro when loaded).
        path: Absolute path of the project file.
        macros: The project's macro table after the walk (unresolved values).
        items: Items defined by this project, fully resolved.
    """

    __slots__ = ("name", "path", "macros", "items")

    def __init__(
        self, name: str, path: Path, macros: Namespace, items: list[Item]
    ) -> None:
        self.name = name
        self.path = path
        self.macros = macros
        self.items = items

    @property
    def directory(self) -> Path:
        return self.path.parent

    def resolved_macros(self) -> Namespace:
        """Return the macro table with every value expanded.

        Raises:
            UndefinedReferenceError: If any macro refers to an undefined one.
        """
        location = str(self.path)
        return Namespace(
            {
                name: expand_macros(value, self.macros, location=location)
                for name, value in self.macros.items()
            }
        )

    def __repr__(self) -> str:
        return f"ProjectModel({self.name!r}, {str(self.path)!r})"


class ProjectBuilder:
    """Walks one project file and builds its ProjectModel.

    Example:
        macros = Namespace({"Configuration": "Debug", "ProjectName": "app"})
        model = ProjectBuilder("app.vcxproj", macros).build()
        for item in model.items:
            print(item.type, item.full_path, dict(item.properties))
    """

    def __init__(
        self,
        path: Path | str,
        macros: Mapping[str, str],
        *,
        filesystem: FileSystem | None = None,
    ) -> None:
        """Create a builder.

        Args:
            path: Path to the project file.
            macros: Starting macros. They are copied; the caller's table is
                never modified.
            filesystem: File-system capability for item metadata.
        """
        self.path = Path(path).absolute()
        self.macros = Namespace(macros)
        self.item_definitions: dict[str, Mapping[str, str]] = {}
        self.items: list[Item] = []
        self._filesystem = filesystem
        self._location = str(self.path)

    def build(self) -> ProjectModel:
        """Read the project file and resolve its items.

        Raises:
            VscccError: On any load, syntax or reference error.
        """
        root = load_xml(self.path)

        for node in node_children(root):
            kind = node_name(node)
            if kind == ITEM_GROUP:
                self._add_item_group(node)
            elif kind == ITEM_DEFINITION_GROUP:
                if self._check_condition(node):
                    self._add_item_definition_group(node)
            elif kind == PROPERTY_GROUP:
                if self._check_condition(node):
                    self._add_property_group(node)

        self._resolve_items()
        name = self.macros.get("ProjectName", self.path.stem)
        return ProjectModel(name, self.path, self.macros, self.items)

    def _check_condition(self, node: ET.Element) -> bool:
        condition = node_attribute(node, "Condition")
        result = evaluate_condition(condition, self.macros, location=self._location)
        if not result:
            logger.debug("Skipping <%s Condition=%r>", node_name(node), condition)
        return result

    def _parse_properties(self, node: ET.Element, props: Namespace) -> None:
        """Add each child element of node to props as name: text."""
        for child in node_children(node):
            if self._check_condition(child):
                props[node_name(child)] = node_text(child)

    def _add_item_group(self, group: ET.Element) -> None:
        # Labelled item groups (ProjectConfigurations and the like) are not items.
        label = node_attribute(group, "Label")
        if label is not None:
            logger.debug("Skipping labelled item group %r", label)
            return
        if not self._check_condition(group):
            return

        for node in node_children(group):
            identity = node_attribute(node, "Include")
            if identity is None or not self._check_condition(node):
                continue

            item_type = node_name(node)
            defaults = self.item_definitions.get(
                PROPERTY_DEFAULT_ALIASES.get(item_type, item_type)
            )
            item = Item(item_type, identity, defaults)

            overrides = Namespace()
            self._parse_properties(node, overrides)
            for name, value in overrides.items():
                inherited = item.properties.get(name, "")
                item.set_property(name, _inherit(value, name, inherited))

            self.items.append(item)

    def _add_item_definition_group(self, group: ET.Element) -> None:
        for node in node_children(group):
            if not self._check_condition(node):
                continue
            props = Namespace()
            self._parse_properties(node, props)
            # A later definition replaces, not extends, an earlier one.
            self.item_definitions[node_name(node)] = MappingProxyType(props)

    def _add_property_group(self, group: ET.Element) -> None:
        for node in node_children(group):
            if self._check_condition(node):
                self.macros[node_name(node)] = node_text(node)

    def _resolve_items(self) -> None:
        project_dir = os.path.dirname(self._location)
        for item in self.items:
            item.project_dir = project_dir
            item.identity = expand_macros(
                item.identity, self.macros, location=self._location
            )
            for name, value in list(item.properties.items()):
                item.set_property(
                    name,
                    expand_property_value(
                        value,
                        item,
                        name,
                        self.macros,
                        filesystem=self._filesystem,
                        location=self._location,
                    ),
                )


def _inherit(value: str, name: str, inherited: str) -> str:
    """Replace ``%(name)`` in an item's own value with the inherited value."""
    token = re.compile(re.escape(f"{METADATA_PREFIX}{name}{CLOSE}"), re.IGNORECASE)
    return token.sub(lambda _: inherited, value)


def load_project(
    path: Path | str,
    macros: Mapping[str, str],
    *,
    filesystem: FileSystem | None = None,
) -> ProjectModel:
    """Load and resolve a single project file.

    Args:
        path: Path to the project file.
        macros: Starting macros (not modified).
        filesystem: File-system capability for item metadata.

    Returns:
        The resolved project.
    """
    model = ProjectBuilder(path, macros, filesystem=filesystem).build()
    logger.info("Loaded %s (%d items)", model.path, len(model.items))
    return model
