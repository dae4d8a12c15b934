"""
Шаблон: разобранное дерево рендеринга вместе с путем источника.

Жизненный цикл: создается пустым → разбирается ровно один раз →
становится неизменяемым и может рендериться сколько угодно раз,
в том числе из нескольких потоков.
"""

from __future__ import annotations

import io
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterable, Optional, TextIO, Union

from .nodes import SequenceNode
from .parser import TemplateParser
from .paths import read_template_text
from .renderer import TemplateRenderer, TextSink

if TYPE_CHECKING:
    from .cache import TemplateCache


class Template:
    """
    Шаблон с деревом рендеринга.

    Путь используется для чтения источника (parse() без аргументов)
    и для разрешения относительных include.
    """

    def __init__(self, path: Union[Path, str, None] = None, *, strict_blocks: bool = True, encoding: str = "utf-8"):
        self.path: Optional[Path] = Path(path) if path is not None else None
        self.strict_blocks = strict_blocks
        self.encoding = encoding
        self.parse_time: Optional[float] = None
        self._root: Optional[SequenceNode] = None

    @property
    def is_parsed(self) -> bool:
        return self._root is not None

    @property
    def root(self) -> SequenceNode:
        if self._root is None:
            raise RuntimeError(f"Template {self.path or '<text>'} is not parsed")
        return self._root

    def parse(self, source: Union[str, TextIO, None] = None) -> None:
        """
        Разбирает шаблон.

        Args:
            source: Текст шаблона, текстовый поток или None — чтение файла self.path

        Raises:
            TemplateParseError: При синтаксической ошибке (шаблон остается неразобранным)
            TemplateNotFoundError: Если файл шаблона не существует
            RuntimeError: При повторном разборе
        """
        if self._root is not None:
            raise RuntimeError(f"Template {self.path or '<text>'} is already parsed")

        # Время фиксируется до чтения: изменения файла во время разбора не потеряются
        started = time.time()

        if source is None:
            if self.path is None:
                raise RuntimeError("Template has neither a path nor a source to parse")
            text = read_template_text(self.path, encoding=self.encoding)
        elif isinstance(source, str):
            text = source
        else:
            text = source.read()

        parser = TemplateParser(text, template_path=self.path, strict_blocks=self.strict_blocks)
        self._root = parser.parse()
        self.parse_time = started

    def render(
        self,
        data: Any,
        out: TextSink,
        *,
        cache: Optional[TemplateCache] = None,
        search_paths: Iterable[Path] = (),
    ) -> None:
        """
        Рендерит шаблон в приемник вывода.

        Args:
            data: Контекст данных (обычно dict); циклы временно изменяют его
            out: Приемник вывода с методом write(str)
            cache: Кэш для включаемых шаблонов
            search_paths: Каталоги поиска включаемых шаблонов, когда кэша нет
        """
        renderer = TemplateRenderer(
            cache,
            search_paths=search_paths,
            strict_blocks=self.strict_blocks,
            encoding=self.encoding,
        )
        renderer.render(self.root, data, out)

    def render_to_string(
        self,
        data: Any,
        *,
        cache: Optional[TemplateCache] = None,
        search_paths: Iterable[Path] = (),
    ) -> str:
        buf = io.StringIO()
        self.render(data, buf, cache=cache, search_paths=search_paths)
        return buf.getvalue()

    def __repr__(self) -> str:
        name = str(self.path) if self.path else "<text>"
        state = "parsed" if self.is_parsed else "empty"
        return f"Template({name!r}, {state})"


def compile_template(text: str, *, path: Union[Path, str, None] = None, strict_blocks: bool = True) -> Template:
    """
    Создает и разбирает шаблон из текста.

    Args:
        text: Исходный текст
        path: Необязательный путь шаблона (для относительных include)
    """
    template = Template(path, strict_blocks=strict_blocks)
    template.parse(text)
    return template


__all__ = ["Template", "compile_template"]
