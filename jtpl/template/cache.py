"""
Кэш разобранных шаблонов.

Шаблоны запоминаются по разрешенному абсолютному пути; повторные запросы
одного пути возвращают один и тот же разделяемый экземпляр. Если mtime файла
отличается от запомненного при разборе, шаблон разбирается заново.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union

from .parser import TemplateParseError
from .paths import resolve_template_path
from .template import Template
from ..errors import TemplateNotFoundError

logger = logging.getLogger(__name__)


class TemplateCache:
    """
    Потокобезопасный кэш шаблонов с путями поиска.

    Передается явно (в Template.render, TemplateRenderer или движок);
    глобального экземпляра нет.
    """

    def __init__(
        self,
        search_paths: Iterable[Union[Path, str]] = (),
        *,
        check_modified: bool = True,
        strict_blocks: bool = True,
        encoding: str = "utf-8",
    ):
        """
        Args:
            search_paths: Каталоги для поиска относительных путей (в порядке приоритета)
            check_modified: Перечитывать шаблон, если файл изменился после разбора
            strict_blocks: Режим разбора незакрытых блоков
            encoding: Кодировка файлов шаблонов
        """
        self._search_paths: List[Path] = [Path(p) for p in search_paths]
        self.check_modified = check_modified
        self.strict_blocks = strict_blocks
        self.encoding = encoding
        self._templates: Dict[Path, Template] = {}
        # mtime файла на момент разбора, по тому же ключу
        self._mtimes: Dict[Path, Optional[float]] = {}
        self._lock = threading.Lock()

    @property
    def search_paths(self) -> List[Path]:
        return list(self._search_paths)

    def add_path(self, path: Union[Path, str]) -> None:
        """Добавляет каталог поиска в конец списка."""
        with self._lock:
            self._search_paths.append(Path(path))

    def resolve_path(self, path: Union[Path, str]) -> Path:
        """Разрешает путь шаблона по каталогам поиска."""
        return resolve_template_path(path, self.search_paths)

    def get_template(self, path: Union[Path, str]) -> Template:
        """
        Возвращает разобранный шаблон для пути.

        Raises:
            TemplateNotFoundError: Если файл шаблона не существует
            TemplateParseError: При ошибке разбора (прежний экземпляр в кэше сохраняется)
        """
        resolved = self.resolve_path(path)
        key = resolved.resolve()

        with self._lock:
            if not key.is_file():
                logger.error("Template file %s doesn't exist", key)
                raise TemplateNotFoundError(path, self.search_paths)

            template = self._templates.get(key)
            if template is None:
                logger.info("Loading template %s", key)
                template = self._load(key)
            elif self.check_modified and self._is_stale(key):
                logger.info("Reloading modified template %s", key)
                template = self._load(key)
            return template

    def clear(self) -> None:
        with self._lock:
            self._templates.clear()
            self._mtimes.clear()

    def __len__(self) -> int:
        return len(self._templates)

    def __contains__(self, path: object) -> bool:
        if not isinstance(path, (str, Path)):
            return False
        return self.resolve_path(path).resolve() in self._templates

    def _load(self, key: Path) -> Template:
        mtime = _mtime(key)
        template = Template(key, strict_blocks=self.strict_blocks, encoding=self.encoding)
        try:
            template.parse()
        except TemplateParseError as e:
            logger.error("Template %s contains an error: %s", key, e)
            raise
        self._templates[key] = template
        self._mtimes[key] = mtime
        return template

    def _is_stale(self, key: Path) -> bool:
        recorded = self._mtimes.get(key)
        return recorded is None or _mtime(key) != recorded


def _mtime(path: Path) -> Optional[float]:
    try:
        return path.stat().st_mtime
    except OSError:
        return None


__all__ = ["TemplateCache"]
