# SPDX-License-Identifier: MIT
"""Output generators for vsccc."""

from vsccc.generators.compile_commands import CompileCommandsGenerator
from vsccc.generators.generator import BaseGenerator, Generator

__all__ = [
    "BaseGenerator",
    "CompileCommandsGenerator",
    "Generator",
]
