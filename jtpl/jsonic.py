from __future__ import annotations

import json
from typing import Any


def dumps(obj: Any) -> str:
    """
    Минимальный JSON-дампер для ответов CLI.
    — без prettify; ensure_ascii=False; без заботы о завершающем \\n (CLI решает сам).
    """
    return json.dumps(obj, ensure_ascii=False)


def dumps_compact(obj: Any) -> str:
    """
    Компактная сериализация значений данных (без пробелов после разделителей).

    Используется при выводе записей и массивов в шаблон.
    """
    return json.dumps(obj, ensure_ascii=False, separators=(",", ":"))


__all__ = ["dumps", "dumps_compact"]
