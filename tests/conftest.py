import textwrap
from pathlib import Path

import pytest

# Импорт из унифицированной инфраструктуры
from tests.infrastructure.file_utils import write


@pytest.fixture(autouse=True)
def _clean_jtpl_env(monkeypatch):
    """Переменные окружения пользователя не должны влиять на тесты."""
    for name in ("JTPL_CACHE", "JTPL_STRICT_BLOCKS", "JTPL_DEBUG"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def tmpproj(tmp_path: Path):
    """Минимальный проект: jtpl.yaml + каталог templates/ с шаблонами и data.json."""
    root = tmp_path
    write(
        root / "jtpl.yaml",
        textwrap.dedent("""
        search_paths:
          - templates
        """).lstrip(),
    )
    write(
        root / "templates" / "page.tpl",
        textwrap.dedent("""
        <? include "header.tpl" ?>
        <? for user users ?>
        - <?= user.name ?>
        <? endfor ?>
        """).lstrip(),
    )
    write(root / "templates" / "header.tpl", "# <?= title ?>\n")
    write(
        root / "data.json",
        '{"title": "Users", "users": [{"name": "Ann"}, {"name": "Bob"}]}',
    )
    return root
