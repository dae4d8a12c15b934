"""
Движок шаблонов: конфигурация + кэш + загрузка и рендеринг по имени.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path
from typing import Any, Optional

from .config import EngineConfig, load_config
from .report_schema import CheckError, CheckReport
from .template import IncludeNode, Template, TemplateCache, TemplateParseError, iter_nodes
from .template.paths import resolve_template_path

logger = logging.getLogger(__name__)


class TemplateEngine:
    """
    Точка входа для загрузки, рендеринга и проверки шаблонов.

    При включенном кэше все шаблоны (включая вложенные include)
    берутся из общего TemplateCache; без кэша каждый вызов разбирает
    файлы заново.
    """

    def __init__(self, config: EngineConfig):
        self.config = config
        self.cache: Optional[TemplateCache] = None
        if config.cache:
            self.cache = TemplateCache(
                config.search_paths,
                check_modified=config.check_modified,
                strict_blocks=config.strict_blocks,
                encoding=config.encoding,
            )

    def load(self, name: str | Path) -> Template:
        """
        Загружает разобранный шаблон по имени или пути.

        Raises:
            TemplateNotFoundError: Если шаблон не найден
            TemplateParseError: При синтаксической ошибке
        """
        if self.cache is not None:
            return self.cache.get_template(name)

        path = resolve_template_path(name, self.config.search_paths)
        template = Template(path, strict_blocks=self.config.strict_blocks, encoding=self.config.encoding)
        template.parse()
        return template

    def render(self, name: str | Path, data: Any) -> str:
        template = self.load(name)
        return template.render_to_string(data, cache=self.cache, search_paths=self.config.search_paths)

    def check(self, name: str | Path) -> CheckReport:
        """
        Проверяет синтаксис шаблона (без рендеринга и без раскрытия include).

        Raises:
            TemplateNotFoundError: Если шаблон не найден
        """
        try:
            template = self.load(name)
        except TemplateParseError as e:
            return CheckReport(
                template=str(name),
                ok=False,
                error=CheckError(
                    kind=e.kind.value,
                    message=e.message,
                    line=e.line,
                    column=e.column,
                    open_block=e.open_frame.value if e.open_frame else None,
                ),
            )

        counts: Counter[str] = Counter()
        includes = []
        for node in iter_nodes(template.root):
            counts[type(node).__name__] += 1
            if isinstance(node, IncludeNode):
                includes.append(node.path.as_posix())

        logger.debug("Checked %s: %d nodes", template.path, sum(counts.values()))
        return CheckReport(
            template=str(template.path),
            ok=True,
            nodes=dict(sorted(counts.items())),
            includes=includes,
        )


def create_engine(root: Path, config_file: Optional[Path] = None) -> TemplateEngine:
    """Создает движок с конфигурацией из jtpl.yaml (или явного файла)."""
    return TemplateEngine(load_config(root, config_file))


__all__ = ["TemplateEngine", "create_engine"]
