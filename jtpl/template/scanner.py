"""
Сканер директив шаблона.

Однопроходное чтение исходного текста: литеральный текст до маркера
директивы `<?`, ключевое слово команды, слова, запросы, строки в кавычках.
Сканер хранит текущую позицию, номер строки и колонки для диагностики.
"""

from __future__ import annotations

from typing import Tuple

OPEN_MARKER = "<?"
CLOSE_MARKER = "?>"

# Ключевое слово, в которое отображается сокращенная форма <?= ... ?>
ECHO_SHORTHAND = "="
ECHO_COMMAND = "echo"

_WHITESPACE = frozenset(" \t\n\r\v\f")


class TemplateScanner:
    """
    Сканер поверх текста шаблона.

    Все методы чтения продвигают позицию вперед и никогда не
    возвращаются назад; «заглядывание» выполняется через peek().
    """

    def __init__(self, text: str):
        self.text = text
        self.length = len(text)
        self.position = 0
        self.line = 1
        self.column = 1
        # Позиция последнего найденного маркера <?
        self.marker_line = 1
        self.marker_column = 1

    def at_end(self) -> bool:
        return self.position >= self.length

    def peek(self, offset: int = 0) -> str:
        """Возвращает символ на позиции position + offset или '' за концом текста."""
        pos = self.position + offset
        if pos < self.length:
            return self.text[pos]
        return ""

    def location(self) -> Tuple[int, int]:
        return self.line, self.column

    def read_text(self) -> Tuple[str, bool]:
        """
        Читает литеральный текст до маркера `<?` и потребляет маркер.

        Returns:
            Кортеж (текст, найден_маркер). Если текст закончился раньше
            маркера, возвращается остаток текста и False.
        """
        start = self.position
        marker = self.text.find(OPEN_MARKER, start)
        if marker == -1:
            self._advance(self.length - start)
            return self.text[start:], False

        self._advance(marker - start)
        self.marker_line, self.marker_column = self.line, self.column
        self._advance(len(OPEN_MARKER))
        return self.text[start:marker], True

    def read_command(self) -> str:
        """
        Читает ключевое слово команды.

        Пропускает ведущие пробелы, затем читает до пробела или маркера `?>`
        (маркер не потребляется). Если первый символ — '=', возвращается 'echo'.
        Пустая строка означает, что команды нет.
        """
        self.skip_whitespace()

        chars = []
        while not self.at_end():
            c = self.peek()
            if c in _WHITESPACE:
                break
            if self._at_close_marker():
                break
            if c == ECHO_SHORTHAND and not chars:
                self._advance(1)
                return ECHO_COMMAND
            chars.append(c)
            self._advance(1)
        return "".join(chars)

    def read_word(self) -> str:
        """Читает слово до пробельного символа или маркера `?>` (ни то, ни другое не потребляется)."""
        chars = []
        while not self.at_end():
            c = self.peek()
            if c in _WHITESPACE or self._at_close_marker():
                break
            chars.append(c)
            self._advance(1)
        return "".join(chars)

    def read_query(self) -> str:
        """
        Читает запрос до пробела или маркера `?>`.

        Завершающий пробел потребляется, маркер `?>` — нет.
        """
        chars = []
        while not self.at_end():
            if self._at_close_marker():
                break
            c = self.peek()
            self._advance(1)
            if c in _WHITESPACE:
                break
            chars.append(c)
        return "".join(chars)

    def read_quoted_string(self) -> str:
        """
        Читает строку в двойных кавычках.

        Returns:
            Содержимое между кавычками или '', если строка не начинается с кавычки
        """
        if self.peek() != '"':
            return ""
        self._advance(1)

        chars = []
        while not self.at_end():
            c = self.peek()
            self._advance(1)
            if c == '"':
                break
            chars.append(c)
        return "".join(chars)

    def skip_whitespace(self) -> None:
        while not self.at_end() and self.peek() in _WHITESPACE:
            self._advance(1)

    def consume_close_marker(self) -> bool:
        """Потребляет маркер `?>`, если он следует далее."""
        if self._at_close_marker():
            self._advance(len(CLOSE_MARKER))
            return True
        return False

    def consume_line_break(self) -> None:
        """Потребляет один необязательный '\\r' и затем один необязательный '\\n'."""
        if self.peek() == "\r":
            self._advance(1)
        if self.peek() == "\n":
            self._advance(1)

    def _at_close_marker(self) -> bool:
        return self.text.startswith(CLOSE_MARKER, self.position)

    def _advance(self, count: int) -> None:
        """
        Перемещает позицию на указанное количество символов,
        обновляя номера строк и колонок.
        """
        for _ in range(count):
            if self.position < self.length:
                if self.text[self.position] == '\n':
                    self.line += 1
                    self.column = 1
                else:
                    self.column += 1
                self.position += 1


__all__ = [
    "TemplateScanner",
    "OPEN_MARKER",
    "CLOSE_MARKER",
    "ECHO_COMMAND",
]
