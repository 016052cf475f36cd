# __init__.py для пакета detection
"""
Пакет detection: проверка загруженной схемы и формирование отчёта.

- duplicates: повторные определения таблиц (исключение или диагностики)
- diagnostics: Diagnostic / Summary / CheckOutput
- SchemaChecker: конвейер проверки
- Reporter: экспорт отчётов
"""

from .diagnostics import CheckOutput, Diagnostic, Summary
from .duplicates import (
    find_duplicate_tables,
    validate_duplicate_tables_as_diagnostics,
    validate_no_duplicate_tables,
)
from .reporter import Reporter
from .checker import SchemaChecker, check_schema, diagnostic_from_error

__all__ = [
    "CheckOutput",
    "Diagnostic",
    "Reporter",
    "SchemaChecker",
    "Summary",
    "check_schema",
    "diagnostic_from_error",
    "find_duplicate_tables",
    "validate_duplicate_tables_as_diagnostics",
    "validate_no_duplicate_tables",
]
