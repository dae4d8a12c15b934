"""
Модель JSON-подобных значений.

Значения представлены обычными JSON-типами Python:
dict (запись), list (массив), str, int/float, bool и None.
None означает «значение отсутствует» — в том числе JSON null,
который при поиске по запросу неотличим от отсутствующего поля.
"""

from __future__ import annotations

import enum
from collections.abc import Mapping, MutableMapping
from typing import Any, Dict, List, Union

from ..jsonic import dumps_compact

# Объединенный тип для значений контекста
JsonValue = Union[None, bool, int, float, str, List[Any], Dict[str, Any]]


class ValueKind(enum.Enum):
    """Виды значений в модели данных."""
    ABSENT = "absent"
    BOOLEAN = "boolean"
    NUMBER = "number"
    TEXT = "text"
    RECORD = "record"
    ARRAY = "array"


def kind_of(value: Any) -> ValueKind:
    """
    Определяет вид значения.

    Raises:
        TypeError: Если значение не принадлежит JSON-подобной модели
    """
    if value is None:
        return ValueKind.ABSENT
    # bool проверяется раньше int: bool является подклассом int
    if isinstance(value, bool):
        return ValueKind.BOOLEAN
    if isinstance(value, (int, float)):
        return ValueKind.NUMBER
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, Mapping):
        return ValueKind.RECORD
    if isinstance(value, (list, tuple)):
        return ValueKind.ARRAY
    raise TypeError(f"Unsupported value type: {type(value).__name__}")


def is_present(value: Any) -> bool:
    return value is not None


def is_string(value: Any) -> bool:
    return isinstance(value, str)


def is_record(value: Any) -> bool:
    """Запись — изменяемое отображение (только в него можно связывать поля цикла)."""
    return isinstance(value, MutableMapping)


def to_text(value: Any) -> str:
    """
    Преобразует значение в текст для вывода в шаблон.

    - строки выводятся как есть
    - булевы значения как true/false
    - числа в десятичной записи (целые float без ".0")
    - записи и массивы как компактный JSON
    - отсутствующее значение как пустая строка
    - прочие скаляры (например, даты из YAML) через str()
    """
    kind = _kind_or_none(value)
    if kind is None:
        return str(value)
    if kind is ValueKind.ABSENT:
        return ""
    if kind is ValueKind.TEXT:
        return value
    if kind is ValueKind.BOOLEAN:
        return "true" if value else "false"
    if kind is ValueKind.NUMBER:
        if isinstance(value, float):
            return str(int(value)) if value.is_integer() else repr(value)
        return str(value)
    if kind is ValueKind.ARRAY:
        return dumps_compact(list(value))
    return dumps_compact(dict(value))


def to_bool(value: Any) -> bool:
    """
    Общее булево преобразование значения.

    Пустые записи и массивы ложны, числа ложны только при нуле.
    Строки "false", "0" и пустая строка ложны, остальные истинны.
    """
    kind = _kind_or_none(value)
    if kind is None:
        return bool(value)
    if kind is ValueKind.ABSENT:
        return False
    if kind is ValueKind.TEXT:
        return value.strip().lower() not in {"", "0", "false"}
    return bool(value)


def _kind_or_none(value: Any) -> ValueKind | None:
    try:
        return kind_of(value)
    except TypeError:
        return None


def set_field(record: MutableMapping[str, Any], name: str, value: Any) -> None:
    """Устанавливает поле записи, перезаписывая существующее значение."""
    record[name] = value


def remove_field(record: MutableMapping[str, Any], name: str) -> None:
    """Удаляет поле записи; отсутствие поля не является ошибкой."""
    record.pop(name, None)


__all__ = [
    "JsonValue",
    "ValueKind",
    "kind_of",
    "is_present",
    "is_string",
    "is_record",
    "to_text",
    "to_bool",
    "set_field",
    "remove_field",
]
