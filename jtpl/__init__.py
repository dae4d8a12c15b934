"""
jtpl — шаблоны с директивами <? ... ?>, рендеринг над JSON-подобными данными.
"""

from __future__ import annotations

from .engine import TemplateEngine, create_engine
from .errors import JtplUserError, TemplateNotFoundError
from .template import (
    ParseErrorKind,
    Template,
    TemplateCache,
    TemplateParseError,
    compile_template,
)

__all__ = [
    "JtplUserError",
    "ParseErrorKind",
    "Template",
    "TemplateCache",
    "TemplateEngine",
    "TemplateNotFoundError",
    "TemplateParseError",
    "compile_template",
    "create_engine",
]
