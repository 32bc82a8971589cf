# SPDX-License-Identifier: MIT
"""Initial macro values.

Macros start from a set of defaults, which can be overridden from the
environment and then from the command line:

    VSCCC_PROPERTIES="Configuration=Release" vsccc -p Platform=Win32

Precedence (highest to lowest):
    1. Command line: --property N=V
    2. Environment variable: VSCCC_PROPERTIES=N=V;...
    3. DEFAULT_MACROS
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Mapping

from vsccc.core.errors import UsageError
from vsccc.core.namespace import Namespace

ENV_PROPERTIES = "VSCCC_PROPERTIES"

# https://learn.microsoft.com/en-us/cpp/build/reference/common-macros-for-build-commands-and-properties
DEFAULT_MACROS: Mapping[str, str] = {
    "Configuration": "Debug",
    "Platform": "x64",
    "IntDir": "$(SolutionDir)obj\\$(Platform)_$(Configuration)\\$(ProjectName)\\",
    "OutDir": "$(SolutionDir)bin\\$(Platform)_$(Configuration)\\",
}


def parse_property_string(s: str) -> dict[str, str]:
    """Parse ``N1=V1;N2=V2`` into a dict.

    Raises:
        UsageError: If an entry is not of the form N=V.
    """
    properties: dict[str, str] = {}
    for entry in s.split(";"):
        if not entry:
            continue
        name, sep, value = entry.partition("=")
        if not sep or not name or not value or "=" in value:
            raise UsageError(f"invalid property string: {s}")
        properties[name] = value
    return properties


def properties_from_environment(
    environ: Mapping[str, str] | None = None,
) -> dict[str, str]:
    """Read properties from the VSCCC_PROPERTIES environment variable."""
    environ = os.environ if environ is None else environ
    value = environ.get(ENV_PROPERTIES)
    return parse_property_string(value) if value else {}


def seed_macros(
    properties: Iterable[Mapping[str, str]] = (),
    *,
    environ: Mapping[str, str] | None = None,
) -> Namespace:
    """Build the starting macro table.

    Args:
        properties: Property sets from the command line, applied in order.
        environ: Environment to read VSCCC_PROPERTIES from (default:
            os.environ).

    Returns:
        Defaults, overridden by the environment, overridden by properties.
    """
    macros = Namespace(DEFAULT_MACROS)
    macros.update(properties_from_environment(environ))
    for props in properties:
        macros.update(props)
    return macros
