"""
Загрузчик конфигурации движка.

Порядок приоритета: переменные окружения → файл jtpl.yaml → значения по умолчанию.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Any, Optional

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from .model import ConfigLoadError, EngineConfig

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "jtpl.yaml"

_yaml = YAML(typ="safe")


def _norm_bool(x: Any) -> bool:
    if isinstance(x, bool):
        return x
    if x is None:
        return False
    s = str(x).strip().lower()
    return s not in {"0", "false", "no", "off", ""}


def _read_yaml_map(path: Path) -> dict:
    """Читает YAML файл и возвращает словарь."""
    try:
        raw = _yaml.load(path.read_text(encoding="utf-8")) or {}
    except YAMLError as e:
        raise ConfigLoadError(f"Invalid YAML in {path}: {e}")
    if not isinstance(raw, dict):
        raise ConfigLoadError(f"YAML must be a mapping: {path}")
    return raw


def config_path(root: Path) -> Path:
    return root / CONFIG_FILENAME


def load_config(root: Path, path: Optional[Path] = None) -> EngineConfig:
    """
    Загружает конфигурацию движка.

    Args:
        root: Рабочий каталог (здесь ищется jtpl.yaml)
        path: Явный путь к файлу конфигурации (должен существовать)

    Returns:
        Конфигурация с примененными переопределениями из окружения
    """
    if path is not None:
        if not path.is_file():
            raise ConfigLoadError(f"Config file not found: {path}")
        cfg_file: Optional[Path] = path
    else:
        candidate = config_path(root)
        cfg_file = candidate if candidate.is_file() else None

    if cfg_file is None:
        logger.debug("No %s in %s, using defaults", CONFIG_FILENAME, root)
        cfg = EngineConfig.from_dict({}, base_dir=root)
    else:
        logger.debug("Loading config %s", cfg_file)
        cfg = EngineConfig.from_dict(_read_yaml_map(cfg_file), base_dir=cfg_file.parent.resolve())

    _apply_env_overrides(cfg)
    return cfg


def _apply_env_overrides(cfg: EngineConfig) -> None:
    """ENV имеет приоритет над файлом конфигурации."""
    env_cache = os.environ.get("JTPL_CACHE")
    if env_cache is not None:
        cfg.cache = _norm_bool(env_cache)

    env_strict = os.environ.get("JTPL_STRICT_BLOCKS")
    if env_strict is not None:
        cfg.strict_blocks = _norm_bool(env_strict)


__all__ = ["load_config", "config_path", "CONFIG_FILENAME"]
