"""
Filesystem helpers for templates.

Resolving include references and search paths, reading template files.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from ..errors import TemplateNotFoundError

logger = logging.getLogger(__name__)


def resolve_include_path(template_path: Optional[Path], reference: str) -> Path:
    """
    Resolves an include reference relative to the including template.

    A relative reference is tried against the parent directory of the
    including template. The resolved form is kept only if that file exists;
    otherwise the reference is returned unchanged so that search paths
    (or the current directory) can resolve it at render time.

    Args:
        template_path: Path of the including template (None for in-memory text)
        reference: Path as written in <? include "..." ?>

    Returns:
        Resolved path or the original reference
    """
    ref = Path(reference)
    if ref.is_absolute() or template_path is None:
        return ref

    candidate = Path(template_path).parent / ref
    if candidate.exists():
        return candidate
    return ref


def resolve_template_path(path: Path | str, search_paths: Iterable[Path]) -> Path:
    """
    Resolves a template path against search paths.

    Absolute paths are returned unchanged. A relative path is tried
    against each search path in order, the first existing candidate wins.
    If none exists, the path is returned as given (relative to cwd).
    """
    p = Path(path)
    if p.is_absolute():
        return p

    for base in search_paths:
        candidate = Path(base) / p
        if candidate.exists():
            return candidate
        logger.debug("Template %s not found in %s", p, candidate)
    return p


def read_template_text(path: Path, *, encoding: str = "utf-8") -> str:
    """
    Reads template source text.

    Raises:
        TemplateNotFoundError: If the file does not exist
    """
    if not path.is_file():
        raise TemplateNotFoundError(path)
    return path.read_text(encoding=encoding)


__all__ = ["resolve_include_path", "resolve_template_path", "read_template_text"]
