"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from JtplUserError.

Programming errors and bugs should NOT inherit from JtplUserError —
they will propagate with full tracebacks.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class JtplUserError(Exception):
    """
    Base class for all user-facing errors in jtpl.

    These errors indicate problems that the user can fix:
    malformed templates, missing template files, broken configuration
    or data files.
    """
    pass


class TemplateNotFoundError(JtplUserError):
    """Template file does not exist (top-level or included)."""

    def __init__(self, path: Path | str, searched: Optional[list[Path]] = None):
        self.path = Path(path)
        self.searched = list(searched or [])
        msg = f"Template not found: {self.path}"
        if self.searched:
            msg += " (searched: " + ", ".join(str(p) for p in self.searched) + ")"
        super().__init__(msg)


__all__ = ["JtplUserError", "TemplateNotFoundError"]
