"""
Узлы дерева рендеринга.

Закрытый набор неизменяемых узлов, которые строит парсер:
Text, Sequence, Interpolation, Conditional, Loop, Include,
и закрытый набор условий ветвей: Truthy, Exists, Always.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Tuple, Union


# ---- Условия ветвей ----

@dataclass(frozen=True)
class TruthyGuard:
    """Ветвь `if`/`elsif`: истинно, если значение запроса истинно."""
    query: str


@dataclass(frozen=True)
class ExistsGuard:
    """Ветвь `ifexist`: истинно, если значение запроса присутствует."""
    query: str


@dataclass(frozen=True)
class AlwaysGuard:
    """Ветвь `else`: истинно всегда."""
    pass


Guard = Union[TruthyGuard, ExistsGuard, AlwaysGuard]

ALWAYS = AlwaysGuard()


# ---- Узлы ----

@dataclass(frozen=True)
class TextNode:
    """
    Литеральный текст шаблона.

    Выводится в результат как есть.
    """
    text: str


@dataclass(frozen=True)
class SequenceNode:
    """Упорядоченная последовательность дочерних узлов."""
    children: Tuple["RenderNode", ...] = ()


@dataclass(frozen=True)
class InterpolationNode:
    """Вывод значения запроса: <? echo query ?> или <?= query ?>."""
    query: str


@dataclass(frozen=True)
class Branch:
    """Одна ветвь условного блока."""
    guard: Guard
    body: SequenceNode


@dataclass(frozen=True)
class ConditionalNode:
    """
    Условный блок if/ifexist ... elsif ... else ... endif.

    Рендерится тело первой ветви, условие которой истинно.
    """
    branches: Tuple[Branch, ...]


@dataclass(frozen=True)
class LoopNode:
    """
    Цикл <? for variable source ?> ... <? endfor ?>.

    Тело рендерится для каждого элемента массива source,
    элемент связывается с полем variable контекста.
    """
    variable: str
    source: str
    body: SequenceNode


@dataclass(frozen=True)
class IncludeNode:
    """Включение другого шаблона по пути (возможно, уже разрешенному)."""
    path: Path


# Объединенный тип для всех узлов
RenderNode = Union[
    TextNode,
    SequenceNode,
    InterpolationNode,
    ConditionalNode,
    LoopNode,
    IncludeNode,
]


def iter_nodes(node: RenderNode) -> Iterator[RenderNode]:
    """
    Обходит дерево в глубину слева направо, начиная с самого узла.

    Включаемые шаблоны не раскрываются: IncludeNode — лист.
    """
    yield node
    if isinstance(node, SequenceNode):
        for child in node.children:
            yield from iter_nodes(child)
    elif isinstance(node, ConditionalNode):
        for branch in node.branches:
            yield from iter_nodes(branch.body)
    elif isinstance(node, LoopNode):
        yield from iter_nodes(node.body)


__all__ = [
    "TruthyGuard",
    "ExistsGuard",
    "AlwaysGuard",
    "Guard",
    "ALWAYS",
    "TextNode",
    "SequenceNode",
    "InterpolationNode",
    "Branch",
    "ConditionalNode",
    "LoopNode",
    "IncludeNode",
    "RenderNode",
    "iter_nodes",
]
