from __future__ import annotations

from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..errors import JtplUserError


class ConfigLoadError(JtplUserError):
    """Ошибка загрузки конфигурации с указанием пути поля."""
    pass


@dataclass
class EngineConfig:
    """
    Настройки движка шаблонов (jtpl.yaml).

    search_paths — каталоги поиска шаблонов; относительные пути
    разрешаются от каталога файла конфигурации.
    """
    search_paths: List[Path] = field(default_factory=list)
    cache: bool = True
    check_modified: bool = True
    strict_blocks: bool = True
    encoding: str = "utf-8"

    @staticmethod
    def from_dict(obj: Optional[Dict[str, Any]], *, base_dir: Optional[Path] = None) -> "EngineConfig":
        """
        Строит конфигурацию из словаря YAML.

        Raises:
            ConfigLoadError: При неизвестных ключах или неверных типах значений
        """
        if obj is None:
            obj = {}
        if not isinstance(obj, dict):
            raise ConfigLoadError(f"<root>: expected mapping, got {type(obj).__name__}")

        known = {f.name for f in fields(EngineConfig)}
        unknown = sorted(set(obj) - known)
        if unknown:
            raise ConfigLoadError(f"<root>: unknown keys: {', '.join(map(str, unknown))}")

        cfg = EngineConfig()

        raw_paths = obj.get("search_paths", [])
        if isinstance(raw_paths, str):
            raw_paths = [raw_paths]
        if not isinstance(raw_paths, list) or not all(isinstance(p, str) for p in raw_paths):
            raise ConfigLoadError("search_paths: expected list of strings")
        base = base_dir or Path.cwd()
        cfg.search_paths = [p if p.is_absolute() else (base / p) for p in map(Path, raw_paths)]

        for name in ("cache", "check_modified", "strict_blocks"):
            if name in obj:
                val = obj[name]
                if not isinstance(val, bool):
                    raise ConfigLoadError(f"{name}: expected bool, got {val!r}")
                setattr(cfg, name, val)

        if "encoding" in obj:
            enc = obj["encoding"]
            if not isinstance(enc, str) or not enc.strip():
                raise ConfigLoadError(f"encoding: expected non-empty string, got {enc!r}")
            cfg.encoding = enc.strip()

        return cfg


__all__ = ["EngineConfig", "ConfigLoadError"]
