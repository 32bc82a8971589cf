# SPDX-License-Identifier: MIT
"""Condition evaluation for project groups and elements.

Only equality is understood:

    Condition="'$(Configuration)|$(Platform)'=='Debug|x64'"

Both sides have their macros expanded against the macro table as it is
when the condition is checked, then compared case-insensitively.
"""

from __future__ import annotations

from collections.abc import Mapping

from vsccc.core.errors import UnsupportedConditionError
from vsccc.core.subst import expand_macros

EQUALS = "=="


def evaluate_condition(
    condition: str | None,
    macros: Mapping[str, str],
    *,
    location: str | None = None,
) -> bool:
    """Evaluate a Condition attribute.

    Args:
        condition: Condition text, or None when the attribute is absent.
        macros: Macro table to expand both sides against.
        location: Location reported in errors.

    Returns:
        True if there is no condition or both sides are equal.

    Raises:
        UnsupportedConditionError: If the condition is not ``L==R``.
    """
    if condition is None:
        return True

    left, sep, right = condition.partition(EQUALS)
    if not sep:
        raise UnsupportedConditionError(condition, location)

    left = expand_macros(left, macros, location=location).strip()
    right = expand_macros(right, macros, location=location).strip()
    return left.casefold() == right.casefold()
