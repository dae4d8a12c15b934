"""
Парсер шаблонов.

Один проход сканера по всему тексту: литеральный текст и директивы
<? ... ?> превращаются в дерево рендеринга. Вложенность блоков
for/if проверяется явным стеком открытых фреймов, независимым
от стека вызовов парсера.
"""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from .nodes import (
    ALWAYS,
    Branch,
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
from .paths import resolve_include_path
from .scanner import ECHO_COMMAND, TemplateScanner
from ..errors import JtplUserError

logger = logging.getLogger(__name__)


class ParseErrorKind(enum.Enum):
    """Виды ошибок разбора шаблона."""
    MISSING_QUERY = "missing-query"
    MISSING_LOOP_VARIABLE = "missing-loop-variable"
    MISSING_FILENAME = "missing-filename"
    MISSING_CLOSE_MARKER = "missing-close-marker"
    UNKNOWN_COMMAND = "unknown-command"
    UNEXPECTED_ELSE = "unexpected-else"
    UNEXPECTED_ELSIF = "unexpected-elsif"
    UNMATCHED_ENDFOR = "unmatched-endfor"
    UNMATCHED_ENDIF = "unmatched-endif"
    UNCLOSED_BLOCK = "unclosed-block"


class FrameKind(enum.Enum):
    """Виды открытых блоков."""
    CONDITIONAL = "if"
    LOOP = "for"


class TemplateParseError(JtplUserError):
    """Ошибка синтаксического анализа шаблона."""

    def __init__(
        self,
        kind: ParseErrorKind,
        message: str,
        line: int,
        column: int,
        *,
        template_path: Optional[Path] = None,
        open_frame: Optional[FrameKind] = None,
    ):
        where = f"{template_path}:" if template_path else ""
        super().__init__(f"{message} at {where}{line}:{column}")
        self.kind = kind
        self.message = message
        self.line = line
        self.column = column
        self.template_path = template_path
        self.open_frame = open_frame


@dataclass
class ParseFrame:
    """
    Открытый блок for/if во время разбора.

    Хранит контейнер, в который вернется парсер после закрытия блока,
    и позицию открывающей директивы для диагностики.
    """
    kind: FrameKind
    keyword: str
    parent: List[RenderNode]
    line: int
    column: int
    # Ветви условного блока: (условие, тело)
    branches: List[Tuple[Guard, List[RenderNode]]] = field(default_factory=list)
    # Параметры и тело цикла
    variable: str = ""
    source: str = ""
    body: List[RenderNode] = field(default_factory=list)

    def open_branch(self, guard: Guard) -> List[RenderNode]:
        body: List[RenderNode] = []
        self.branches.append((guard, body))
        return body

    def build(self) -> RenderNode:
        """Создает неизменяемый узел из накопленного содержимого."""
        if self.kind is FrameKind.LOOP:
            return LoopNode(
                variable=self.variable,
                source=self.source,
                body=SequenceNode(tuple(self.body)),
            )
        return ConditionalNode(tuple(
            Branch(guard=guard, body=SequenceNode(tuple(body)))
            for guard, body in self.branches
        ))


class TemplateParser:
    """
    Парсер директив шаблона.

    Экземпляр рассчитан на один вызов parse(): состояние парсера —
    это стек фреймов и указатель на текущий заполняемый контейнер.
    """

    def __init__(self, text: str, *, template_path: Optional[Path] = None, strict_blocks: bool = True):
        """
        Args:
            text: Исходный текст шаблона
            template_path: Путь к файлу шаблона (для относительных include и диагностики)
            strict_blocks: Незакрытые блоки в конце текста — ошибка (иначе закрываются неявно)
        """
        self.scanner = TemplateScanner(text)
        self.template_path = template_path
        self.strict_blocks = strict_blocks

        self._root: List[RenderNode] = []
        self._container: List[RenderNode] = self._root
        self._stack: List[ParseFrame] = []

        self._commands: Dict[str, Callable[[str], None]] = {
            "echo": self._parse_echo,
            "for": self._parse_for,
            "if": self._parse_if,
            "ifexist": self._parse_if,
            "else": self._parse_else,
            "elsif": self._parse_elsif,
            "elif": self._parse_elsif,
            "endfor": self._parse_endfor,
            "endif": self._parse_endif,
            "include": self._parse_include,
        }

    def parse(self) -> SequenceNode:
        """
        Разбирает весь текст в дерево рендеринга.

        Returns:
            Корневой узел-последовательность

        Raises:
            TemplateParseError: При любой синтаксической ошибке
        """
        scanner = self.scanner

        while True:
            text, found_marker = scanner.read_text()
            if text:
                self._container.append(TextNode(text))
            if not found_marker:
                break

            command = scanner.read_command()
            if not command:
                logger.debug("Empty directive at %d:%d, stopping", scanner.marker_line, scanner.marker_column)
                break

            scanner.skip_whitespace()

            handler = self._commands.get(command)
            if handler is None:
                raise self._error(ParseErrorKind.UNKNOWN_COMMAND, f"Unknown command {command}")
            handler(command)

            scanner.skip_whitespace()
            if not scanner.consume_close_marker():
                raise self._error(ParseErrorKind.MISSING_CLOSE_MARKER, "Missing ?>")

            # Строки, состоящие только из директивы, не оставляют пустую строку
            if command != ECHO_COMMAND:
                scanner.consume_line_break()

        self._finish()

        root = SequenceNode(tuple(self._root))
        logger.debug(
            "Parsed template %s -> %d top-level nodes",
            self.template_path or "<text>", len(root.children),
        )
        return root

    # ======= Команды =======

    def _parse_echo(self, command: str) -> None:
        query = self._require_query(command)
        self._container.append(InterpolationNode(query))

    def _parse_for(self, command: str) -> None:
        variable = self.scanner.read_word()
        if not variable:
            raise self._error(ParseErrorKind.MISSING_LOOP_VARIABLE, "Missing variable in <? for ?> command")
        self.scanner.skip_whitespace()
        source = self._require_query(command)

        frame = self._push(FrameKind.LOOP, command)
        frame.variable = variable
        frame.source = source
        self._container = frame.body

    def _parse_if(self, command: str) -> None:
        query = self._require_query(command)
        guard: Guard = ExistsGuard(query) if command == "ifexist" else TruthyGuard(query)

        frame = self._push(FrameKind.CONDITIONAL, command)
        self._container = frame.open_branch(guard)

    def _parse_else(self, command: str) -> None:
        frame = self._innermost()
        if frame is None or frame.kind is not FrameKind.CONDITIONAL:
            raise self._error(
                ParseErrorKind.UNEXPECTED_ELSE,
                "Missing <? if ?> or <? ifexist ?> for <? else ?>",
            )
        self._container = frame.open_branch(ALWAYS)

    def _parse_elsif(self, command: str) -> None:
        query = self._require_query(command)
        frame = self._innermost()
        if frame is None or frame.kind is not FrameKind.CONDITIONAL:
            raise self._error(
                ParseErrorKind.UNEXPECTED_ELSIF,
                f"Missing <? if ?> or <? ifexist ?> for <? {command} ?>",
            )
        self._container = frame.open_branch(TruthyGuard(query))

    def _parse_endfor(self, command: str) -> None:
        frame = self._innermost()
        if frame is None or frame.kind is not FrameKind.LOOP:
            raise self._error(ParseErrorKind.UNMATCHED_ENDFOR, "Unexpected <? endfor ?> found")
        self._pop()

    def _parse_endif(self, command: str) -> None:
        frame = self._innermost()
        if frame is None or frame.kind is not FrameKind.CONDITIONAL:
            raise self._error(ParseErrorKind.UNMATCHED_ENDIF, "Unexpected <? endif ?> found")
        self._pop()

    def _parse_include(self, command: str) -> None:
        self.scanner.skip_whitespace()
        filename = self.scanner.read_quoted_string()
        if not filename:
            raise self._error(ParseErrorKind.MISSING_FILENAME, "Missing filename in <? include ?>")
        path = resolve_include_path(self.template_path, filename)
        self._container.append(IncludeNode(path))

    # ======= Стек фреймов =======

    def _push(self, kind: FrameKind, keyword: str) -> ParseFrame:
        frame = ParseFrame(
            kind=kind,
            keyword=keyword,
            parent=self._container,
            line=self.scanner.marker_line,
            column=self.scanner.marker_column,
        )
        self._stack.append(frame)
        return frame

    def _pop(self) -> None:
        """Закрывает внутренний фрейм и возвращается к объемлющему контейнеру."""
        frame = self._stack.pop()
        frame.parent.append(frame.build())
        self._container = frame.parent

    def _innermost(self) -> Optional[ParseFrame]:
        return self._stack[-1] if self._stack else None

    def _finish(self) -> None:
        """Проверяет, что все блоки закрыты к концу текста."""
        if not self._stack:
            return

        frame = self._stack[-1]
        if self.strict_blocks:
            closing = "endfor" if frame.kind is FrameKind.LOOP else "endif"
            raise TemplateParseError(
                ParseErrorKind.UNCLOSED_BLOCK,
                f"Unclosed <? {frame.keyword} ?> opened at {frame.line}:{frame.column}, expected <? {closing} ?>",
                self.scanner.line,
                self.scanner.column,
                template_path=self.template_path,
                open_frame=frame.kind,
            )

        logger.warning(
            "Template %s: closing %d unclosed block(s) at end of input",
            self.template_path or "<text>", len(self._stack),
        )
        while self._stack:
            self._pop()

    # ======= Вспомогательные методы =======

    def _require_query(self, command: str) -> str:
        query = self.scanner.read_query()
        if not query:
            raise self._error(ParseErrorKind.MISSING_QUERY, f"Missing query in <? {command} ?>")
        return query

    def _error(self, kind: ParseErrorKind, message: str) -> TemplateParseError:
        """Ошибка с позицией текущей директивы и видом внутреннего открытого блока."""
        frame = self._innermost()
        return TemplateParseError(
            kind,
            message,
            self.scanner.marker_line,
            self.scanner.marker_column,
            template_path=self.template_path,
            open_frame=frame.kind if frame else None,
        )


def parse_template(text: str, *, template_path: Optional[Path] = None, strict_blocks: bool = True) -> SequenceNode:
    """
    Удобная функция для парсинга шаблона из текста.

    Raises:
        TemplateParseError: При ошибке синтаксического анализа
    """
    parser = TemplateParser(text, template_path=template_path, strict_blocks=strict_blocks)
    return parser.parse()


__all__ = [
    "ParseErrorKind",
    "FrameKind",
    "TemplateParseError",
    "ParseFrame",
    "TemplateParser",
    "parse_template",
]
