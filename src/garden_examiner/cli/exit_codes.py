"""Process exit codes of the ``gex`` command.

Only :func:`garden_examiner.cli.app.cli` turns errors into these values;
scripts can rely on them to tell a missing element from a broken setup.
"""

from __future__ import annotations

SUCCESS: int = 0
"""The command resolved and rendered its elements."""

GENERAL_ERROR: int = 1
"""A GexError other than a missing element; message and hint were shown."""

UNEXPECTED_ERROR: int = 2
"""An unhandled exception escaped all known error boundaries."""

NOT_FOUND: int = 3
"""A named shoot, seed, profile or project does not exist."""

KEYBOARD_INTERRUPT: int = 130
"""User pressed Ctrl+C.  Follows POSIX convention (128 + SIGINT=2)."""
