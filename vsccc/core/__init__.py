# SPDX-License-Identifier: MIT
"""Project model and substitution engine for vsccc."""
