"""
Конвейер проверки файлов схемы.

Этапы:
1. загрузка без проверки дубликатов (чтобы сохранить позиции всех определений);
   ошибка загрузки -> ровно одна диагностика, конвейер останавливается
2. проверка дубликатов в форме диагностик
3. (зарезервировано) дополнительные правила и сравнение с живой базой

Ошибки содержимого схемы не выбрасываются наружу, а попадают в CheckOutput.
Прочие исключения (ошибки программы) пробрасываются вызывающему.
"""

from __future__ import annotations

import os
import re
from typing import Union

from lpcheck.core.exceptions import SchemaCheckError, handle_exception
from lpcheck.core.logging import get_logger
from lpcheck.loader import schema_loader

from .diagnostics import CheckOutput, Diagnostic
from .duplicates import validate_duplicate_tables_as_diagnostics

logger = get_logger(__name__)

_FILE_LOCATION_PATTERN = re.compile(r"([^:]+):(\d+):(\d+)")
_LINE_PATTERN = re.compile(r"line (\d+)")


def diagnostic_from_error(error: SchemaCheckError, default_path: str) -> Diagnostic:
    """
    Ошибка загрузки -> одна диагностика.

    Сначала используется структурированная позиция ошибки; если её нет,
    разбор текста: "файл:строка:колонка", затем "line N", иначе
    начало входного пути.
    """
    code = error.code

    if error.location is not None:
        return Diagnostic.at(error.message, error.location, code=code, default_file=default_path)

    text = error.message

    match = _FILE_LOCATION_PATTERN.search(text)
    if match:
        parts = text.split(":", 3)
        message = parts[3].strip() if len(parts) == 4 else text
        return Diagnostic(
            message=message,
            code=code,
            file=match.group(1),
            line=int(match.group(2)),
            column=int(match.group(3)),
        )

    match = _LINE_PATTERN.search(text)
    if match:
        return Diagnostic(message=text, code=code, file=default_path, line=int(match.group(1)), column=1)

    return Diagnostic(message=text, code=code, file=default_path, line=1, column=1)


class SchemaChecker:
    """Проверка каталога или файла схемы с результатом в виде CheckOutput."""

    # ==========================================================
    # PUBLIC API
    # ==========================================================

    def run(self, path: Union[str, os.PathLike]) -> CheckOutput:
        path_str = os.fspath(path)
        output = CheckOutput()

        # ---------- Этап 1: загрузка ----------
        try:
            schema = schema_loader.load_schema(path_str, validate=False)
        except SchemaCheckError as e:
            logger.debug("schema_load_failed", path=path_str, **handle_exception(e))
            output.add(diagnostic_from_error(e, path_str))
            return output

        # ---------- Этап 2: дубликаты ----------
        for diagnostic in validate_duplicate_tables_as_diagnostics(schema):
            output.add(diagnostic)

        # ---------- Этап 3: правила и сравнение с базой ----------
        # зарезервировано: без подключения к базе здесь будет предупреждение

        logger.info(
            "schema_checked",
            path=path_str,
            tables=len(schema.tables),
            errors=output.summary.errors,
            valid=output.summary.valid,
        )
        return output


def check_schema(path: Union[str, os.PathLike]) -> str:
    """Проверка схемы с отчётом в JSON (отступ 2)."""
    return SchemaChecker().run(path).to_json()
