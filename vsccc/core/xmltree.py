# SPDX-License-Identifier: MIT
"""Reading project files into an element tree.

Project files declare the MSBuild XML namespace; it is stripped on load
so elements can be matched by their plain names.
"""

from __future__ import annotations

import xml.etree.ElementTree as ET
from collections.abc import Iterator
from pathlib import Path

from vsccc.core.errors import ProjectLoadError


def _local_name(name: str) -> str:
    if "}" in name:
        return name.split("}", 1)[1]
    return name


def load_xml(path: Path | str) -> ET.Element:
    """Parse an XML project file and return its root element.

    Raises:
        ProjectLoadError: If the file cannot be read or parsed.
    """
    try:
        tree = ET.parse(path)
    except (OSError, ET.ParseError) as e:
        raise ProjectLoadError(f"failed to load project: {e}", str(path)) from e

    root = tree.getroot()
    if root is None:
        raise ProjectLoadError("failed to load project: no root element", str(path))

    for elem in root.iter():
        elem.tag = _local_name(elem.tag)
        for attr in [a for a in elem.attrib if "}" in a]:
            elem.attrib[_local_name(attr)] = elem.attrib.pop(attr)
    return root


def node_name(node: ET.Element) -> str:
    return node.tag


def node_attribute(node: ET.Element, name: str) -> str | None:
    return node.get(name)


def node_children(node: ET.Element) -> Iterator[ET.Element]:
    return iter(node)


def node_text(node: ET.Element) -> str:
    """Concatenated text content of a node and its descendants."""
    return "".join(node.itertext())
