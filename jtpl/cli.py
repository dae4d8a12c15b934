from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Optional

from .data import load_data
from .engine import create_engine
from .errors import JtplUserError
from .jsonic import dumps as jdumps
from .version import tool_version


def _setup_logging() -> None:
    level = logging.DEBUG if os.environ.get("JTPL_DEBUG") else logging.WARNING
    root = logging.getLogger("jtpl")
    root.setLevel(level)
    if not root.handlers:
        h = logging.StreamHandler()
        h.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        root.addHandler(h)


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="jtpl",
        description="Render <? ... ?> templates against JSON/YAML data",
        add_help=True,
    )
    p.add_argument("-v", "--version", action="version", version=f"%(prog)s {tool_version()}")
    p.add_argument(
        "--config",
        metavar="PATH",
        help="файл конфигурации (по умолчанию ./jtpl.yaml, если есть)",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    sp_render = sub.add_parser("render", help="Отрендерить шаблон в stdout или файл")
    sp_render.add_argument("template", help="путь к шаблону (относительные ищутся в search_paths)")
    sp_render.add_argument(
        "--data",
        metavar="FILE|-",
        help="данные: JSON-файл, YAML-файл (.yaml/.yml) или - для JSON из stdin",
    )
    sp_render.add_argument("-o", "--output", metavar="FILE", help="записать результат в файл")

    sp_check = sub.add_parser("check", help="Проверить синтаксис шаблона (JSON-отчёт)")
    sp_check.add_argument("template", help="путь к шаблону")

    return p


def main(argv: list[str] | None = None) -> int:
    ns = _build_parser().parse_args(argv)
    _setup_logging()

    config_file: Optional[Path] = Path(ns.config) if ns.config else None

    try:
        engine = create_engine(Path.cwd(), config_file)

        if ns.cmd == "render":
            data = load_data(ns.data)
            text = engine.render(ns.template, data)
            if ns.output:
                Path(ns.output).write_text(text, encoding=engine.config.encoding)
            else:
                sys.stdout.write(text)
            return 0

        if ns.cmd == "check":
            report = engine.check(ns.template)
            sys.stdout.write(jdumps(report.model_dump(mode="json")))
            return 0 if report.ok else 2

    except JtplUserError as e:
        sys.stderr.write(str(e).rstrip() + "\n")
        return 2

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
