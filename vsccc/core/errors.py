# SPDX-License-Identifier: MIT
"""Custom exceptions for vsccc.

All vsccc exceptions inherit from VscccError, which includes an optional
location (usually the project or solution file being read) for better
error messages. Each category carries its own process exit status so the
command line can report failures distinguishably.
"""

from __future__ import annotations


class VscccError(Exception):
    """Base class for all vsccc exceptions.

    Attributes:
        message: The error message.
        location: Optional location (file path) where the error occurred.
        exit_code: Process exit status for this category of error.
    """

    exit_code = 1

    def __init__(
        self,
        message: str,
        location: str | None = None,
    ) -> None:
        self.message = message
        self.location = location
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.location:
            return f"{self.location}: {self.message}"
        return self.message


class UsageError(VscccError):
    """Invalid command line or property string."""

    exit_code = 2


class ProjectLoadError(VscccError):
    """A project or solution could not be read.

    Raised for missing or malformed documents, documents without a root
    element, and directories that do not hold exactly one project.
    """

    exit_code = 3


class UnsupportedProjectTypeError(ProjectLoadError):
    """A solution references a project type that cannot be loaded.

    Attributes:
        type_guid: The project type GUID from the solution.
    """

    def __init__(self, type_guid: str, location: str | None = None) -> None:
        self.type_guid = type_guid
        super().__init__(f"unsupported project type: {type_guid}", location)


class UndefinedReferenceError(VscccError):
    """A substitution names something that does not exist."""

    exit_code = 4


class MissingMacroError(UndefinedReferenceError):
    """Referenced macro does not exist.

    Attributes:
        name: The name of the missing macro.
    """

    def __init__(self, name: str, location: str | None = None) -> None:
        self.name = name
        super().__init__(f"undefined macro: $({name})", location)


class UnknownMetadataError(UndefinedReferenceError):
    """Referenced item metadata is not one of the well-known names.

    Attributes:
        name: The unknown metadata name.
    """

    def __init__(self, name: str, location: str | None = None) -> None:
        self.name = name
        super().__init__(f"unknown item metadata: %({name})", location)


class ParseError(VscccError):
    """Syntax error in a substitution or condition."""

    exit_code = 5


class SubstitutionError(ParseError):
    """Error during macro or metadata substitution."""


class UnterminatedSubstitutionError(SubstitutionError):
    """A substitution token has no closing parenthesis.

    Attributes:
        fragment: The text from the start of the offending token.
    """

    def __init__(self, fragment: str, location: str | None = None) -> None:
        self.fragment = fragment
        super().__init__(f"failed to parse substitution: {fragment}", location)


class NestedSubstitutionError(SubstitutionError):
    """A token opens inside another token that never closes.

    Attributes:
        fragment: The text from the start of the outer token.
    """

    def __init__(self, fragment: str, location: str | None = None) -> None:
        self.fragment = fragment
        super().__init__(f"interleaved substitution not supported: {fragment}", location)


class CircularReferenceError(SubstitutionError):
    """Circular macro or metadata reference detected.

    Attributes:
        chain: The chain of names forming the cycle.
    """

    def __init__(self, chain: list[str], location: str | None = None) -> None:
        self.chain = chain
        cycle_str = " -> ".join(chain)
        super().__init__(f"circular reference: {cycle_str}", location)


class UnsupportedConditionError(ParseError):
    """A condition is not of the form ``L==R``.

    Attributes:
        condition: The condition text.
    """

    def __init__(self, condition: str, location: str | None = None) -> None:
        self.condition = condition
        super().__init__(f"unsupported condition: {condition}", location)


class MissingResourceError(VscccError):
    """A referenced file does not exist."""

    exit_code = 6


class MissingProjectError(MissingResourceError):
    """A solution references a project file that does not exist.

    Attributes:
        path: The path to the missing project.
    """

    def __init__(self, path: str, location: str | None = None) -> None:
        self.path = path
        super().__init__(f"dependent project does not exist: {path}", location)


class OutputError(VscccError):
    """Generated output could not be written."""

    exit_code = 7
