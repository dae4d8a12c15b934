"""
Шаблонизатор директив <? ... ?> над JSON-подобными данными.

Сканер → парсер (со стеком открытых блоков) → неизменяемое дерево
рендеринга → рендерер, обходящий дерево над контекстом данных.
"""

from __future__ import annotations

from .cache import TemplateCache
from .nodes import (
    ALWAYS,
    AlwaysGuard,
    Branch,
    ConditionalNode,
    ExistsGuard,
    IncludeNode,
    InterpolationNode,
    LoopNode,
    RenderNode,
    SequenceNode,
    TextNode,
    TruthyGuard,
    iter_nodes,
)
from .parser import FrameKind, ParseErrorKind, TemplateParseError, TemplateParser, parse_template
from .renderer import TemplateRenderer, guard_holds
from .template import Template, compile_template

__all__ = [
    "ALWAYS",
    "AlwaysGuard",
    "Branch",
    "ConditionalNode",
    "ExistsGuard",
    "FrameKind",
    "IncludeNode",
    "InterpolationNode",
    "LoopNode",
    "ParseErrorKind",
    "RenderNode",
    "SequenceNode",
    "Template",
    "TemplateCache",
    "TemplateParseError",
    "TemplateParser",
    "TemplateRenderer",
    "TextNode",
    "TruthyGuard",
    "compile_template",
    "guard_holds",
    "iter_nodes",
    "parse_template",
]
