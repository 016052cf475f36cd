"""
main.py

Точка входа проверки файлов схемы PostgreSQL (.lp.sql).

Запуск:
    python main.py check schema/
    python main.py check users.lp.sql --output json
    python main.py check users.lp.sql --output json --out report.json
    python main.py check-schema schema/ --print-schema
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from lpcheck.core.config import get_settings
from lpcheck.core.constants import TOOL_NAME, VERSION
from lpcheck.core.exceptions import SchemaCheckError
from lpcheck.core.logging import configure_logging, get_logger
from lpcheck.detection import Reporter, SchemaChecker
from lpcheck.loader import load_schema

logger = get_logger(__name__)

CHECK_COMMANDS = ("check", "check-schema")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog=TOOL_NAME,
        description="Проверка файлов схемы PostgreSQL (.lp.sql)",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {VERSION}",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    for name in CHECK_COMMANDS:
        check = subparsers.add_parser(
            name,
            help="Проверить файлы .lp.sql на ошибки",
            description=(
                "Проверка файлов схемы. Для каталога проверяются все файлы .lp.sql "
                "верхнего уровня (без подкаталогов)."
            ),
        )
        check.add_argument(
            "path",
            help="Каталог схемы или файл .lp.sql",
        )

        mode = check.add_mutually_exclusive_group()
        mode.add_argument(
            "--print-schema",
            action="store_true",
            help="Вывести разобранную схему в JSON",
        )
        mode.add_argument(
            "--output",
            choices=["json", "text"],
            help="Формат отчёта о диагностиках",
        )

        check.add_argument(
            "--out",
            help="Файл для сохранения отчёта (если не указан: вывод в stdout)",
        )

    return parser


def print_schema(path: str) -> int:
    try:
        schema = load_schema(path)
    except SchemaCheckError as e:
        print(f"Failed to load schema: {e.message}", file=sys.stderr)
        return 1

    print(schema.to_json())
    return 0


def run_check(path: str, output_format: Optional[str], out: Optional[str]) -> int:
    result = SchemaChecker().run(path)

    fmt = output_format or "text"
    rendered = Reporter().export(result, format=fmt, path=path, output_file=out)
    if rendered:
        print(rendered)

    # В режиме JSON ошибки содержимого не меняют код выхода
    if fmt == "json":
        return 0
    return 0 if result.summary.valid else 1


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    settings = get_settings()
    configure_logging(log_level=settings.log_level, log_format=settings.log_format)
    logger.debug("command_started", command=args.command, path=args.path)

    if args.print_schema:
        return print_schema(args.path)

    return run_check(args.path, args.output, args.out)


if __name__ == "__main__":
    raise SystemExit(main())
