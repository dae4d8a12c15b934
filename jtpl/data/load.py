"""
Загрузка данных для рендеринга из JSON/YAML файлов или stdin.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..errors import JtplUserError

_yaml = YAML(typ="safe")

_YAML_SUFFIXES = {".yaml", ".yml"}


class DataLoadError(JtplUserError):
    """Ошибка чтения или разбора файла данных."""
    pass


def load_data(source: Optional[str]) -> Any:
    """
    Загружает данные контекста рендеринга.

    Поддерживает три формата источника:
    - None: пустая запись {}
    - "-": JSON из stdin
    - путь к файлу: YAML для .yaml/.yml, иначе JSON

    Raises:
        DataLoadError: Если файл не найден или содержимое некорректно
    """
    if source is None:
        return {}

    if source == "-":
        return _parse_json(sys.stdin.read(), "<stdin>")

    path = Path(source)
    if not path.is_file():
        raise DataLoadError(f"Data file not found: {path}")
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DataLoadError(f"Failed to read data file {path}: {e}")

    if path.suffix.lower() in _YAML_SUFFIXES:
        return _parse_yaml(text, str(path))
    return _parse_json(text, str(path))


def _parse_json(text: str, origin: str) -> Any:
    try:
        return json.loads(text) if text.strip() else {}
    except json.JSONDecodeError as e:
        raise DataLoadError(f"Invalid JSON in {origin}: {e}")


def _parse_yaml(text: str, origin: str) -> Any:
    try:
        data = _yaml.load(text)
    except YAMLError as e:
        raise DataLoadError(f"Invalid YAML in {origin}: {e}")
    return {} if data is None else data


__all__ = ["load_data", "DataLoadError"]
