"""
Вычислитель путевых запросов к JSON-подобным данным.

Синтаксис запроса: имена полей через точку, каждое имя может
сопровождаться одним или несколькими индексами массива:

    user.name
    orders[0].items[2]
    matrix[1][0]

Любой шаг по значению неподходящей формы или индекс за пределами
массива дает отсутствующее значение (None), а не ошибку.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any, List, Optional

_INDEX_RE = re.compile(r"\[([0-9]+)\]")
# Имя поля и следующие за ним индексы; иной текст после индексов недопустим
_TOKEN_RE = re.compile(r"([^\[\]]*)((?:\[[0-9]+\])*)")


class Query:
    """
    Запрос к источнику данных.

    Источник не копируется: найденные значения — это ссылки
    на объекты внутри исходной структуры.
    """

    def __init__(self, source: Any):
        self.source = source

    def find(self, path: str) -> Any:
        """
        Находит значение по пути.

        Args:
            path: Путевой запрос; пустой путь возвращает сам источник

        Returns:
            Найденное значение или None, если значение отсутствует
        """
        result = self.source
        for token in path.split("."):
            if result is None:
                break
            split = _split_token(token)
            if split is None:
                return None
            name, indexes = split
            if name:
                result = result.get(name) if isinstance(result, Mapping) else None
            for index in indexes:
                if result is None:
                    break
                if isinstance(result, (list, tuple)) and index < len(result):
                    result = result[index]
                else:
                    result = None
        return result

    def find_array(self, path: str) -> Optional[List[Any]]:
        """
        Находит массив по пути.

        Returns:
            Список или None, если по пути нет массива
        """
        result = self.find(path)
        if isinstance(result, list):
            return result
        if isinstance(result, tuple):
            return list(result)
        return None


def _split_token(token: str) -> Optional[tuple[str, List[int]]]:
    """
    Разделяет токен пути на имя поля и список индексов: 'a[1][2]' → ('a', [1, 2]).

    Returns:
        None для некорректного токена (например, 'a[0]b' или 'a[x]')
    """
    match = _TOKEN_RE.fullmatch(token)
    if match is None:
        return None
    name, tail = match.groups()
    return name, [int(i) for i in _INDEX_RE.findall(tail)]


__all__ = ["Query"]
