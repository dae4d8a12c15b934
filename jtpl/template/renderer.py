"""
Вычисление дерева рендеринга.

Обход в глубину слева направо: у каждого вида узла одно правило
рендеринга над контекстом данных и приемником вывода. Ошибки
отсутствующих данных не возникают — пустой вывод или пропуск.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, List, Optional, Protocol

from .nodes import (
    AlwaysGuard,
    ConditionalNode,
    ExistsGuard,
    Guard,
    IncludeNode,
    InterpolationNode,
    LoopNode,
    RenderNode,
    SequenceNode,
    TextNode,
    TruthyGuard,
)
from .paths import resolve_template_path
from ..data.model import is_present, is_record, is_string, remove_field, set_field, to_bool, to_text
from ..data.query import Query

if TYPE_CHECKING:
    from .cache import TemplateCache
    from .template import Template

logger = logging.getLogger(__name__)


class TextSink(Protocol):
    """Приемник вывода: любой объект с методом write(str)."""

    def write(self, text: str) -> Any:
        ...


class TemplateRenderer:
    """
    Рендерер деревьев шаблонов.

    Сам по себе не хранит состояния рендеринга и может использоваться
    из нескольких потоков одновременно при различных контекстах данных.
    """

    def __init__(
        self,
        cache: Optional[TemplateCache] = None,
        *,
        search_paths: Iterable[Path] = (),
        strict_blocks: bool = True,
        encoding: str = "utf-8",
    ):
        """
        Args:
            cache: Кэш шаблонов для include; без кэша включаемый шаблон
                   разбирается заново при каждом рендеринге
            search_paths: Каталоги поиска include (без кэша; у кэша свои)
            strict_blocks: Режим разбора включаемых шаблонов (без кэша)
            encoding: Кодировка включаемых файлов (без кэша)
        """
        self.cache = cache
        self.search_paths: List[Path] = [Path(p) for p in search_paths]
        self.strict_blocks = strict_blocks
        self.encoding = encoding

    def render(self, node: RenderNode, data: Any, out: TextSink) -> None:
        """Рендерит узел в приемник вывода."""
        if isinstance(node, TextNode):
            out.write(node.text)
        elif isinstance(node, SequenceNode):
            for child in node.children:
                self.render(child, data, out)
        elif isinstance(node, InterpolationNode):
            self._render_interpolation(node, data, out)
        elif isinstance(node, ConditionalNode):
            self._render_conditional(node, data, out)
        elif isinstance(node, LoopNode):
            self._render_loop(node, data, out)
        elif isinstance(node, IncludeNode):
            self._render_include(node, data, out)
        else:
            raise TypeError(f"Unknown render node type: {type(node).__name__}")

    def _render_interpolation(self, node: InterpolationNode, data: Any, out: TextSink) -> None:
        value = Query(data).find(node.query)
        if is_present(value):
            out.write(to_text(value))

    def _render_conditional(self, node: ConditionalNode, data: Any, out: TextSink) -> None:
        for branch in node.branches:
            if guard_holds(branch.guard, data):
                self.render(branch.body, data, out)
                break

    def _render_loop(self, node: LoopNode, data: Any, out: TextSink) -> None:
        if not is_record(data):
            return
        items = Query(data).find_array(node.source)
        if items is None:
            return

        # Поле переменной удаляется после цикла, даже если существовало до него
        try:
            for item in items:
                set_field(data, node.variable, item)
                self.render(node.body, data, out)
                remove_field(data, node.variable)
        finally:
            remove_field(data, node.variable)

    def _render_include(self, node: IncludeNode, data: Any, out: TextSink) -> None:
        template = self._load_include(node.path)
        self.render(template.root, data, out)

    def _load_include(self, path: Path) -> Template:
        if self.cache is not None:
            return self.cache.get_template(path)

        from .template import Template

        resolved = resolve_template_path(path, self.search_paths)
        logger.debug("Parsing included template %s (no cache)", resolved)
        template = Template(resolved, strict_blocks=self.strict_blocks, encoding=self.encoding)
        template.parse()
        return template


def guard_holds(guard: Guard, data: Any) -> bool:
    """
    Вычисляет условие ветви.

    - Exists: значение запроса присутствует
    - Truthy: строка истинна, если непуста (даже "false" или "0");
      прочие значения — по общему булеву преобразованию
    - Always: всегда истинно
    """
    if isinstance(guard, AlwaysGuard):
        return True

    value = Query(data).find(guard.query)
    if isinstance(guard, ExistsGuard):
        return is_present(value)
    if isinstance(guard, TruthyGuard):
        if not is_present(value):
            return False
        if is_string(value):
            return value != ""
        return to_bool(value)
    raise TypeError(f"Unknown guard type: {type(guard).__name__}")


__all__ = ["TemplateRenderer", "TextSink", "guard_holds"]
