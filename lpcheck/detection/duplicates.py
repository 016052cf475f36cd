"""
Проверка повторных определений таблиц.

Ключ таблицы: "эффективная_схема.имя" (пустая схема = public).
Группировка по точному совпадению строк: регистр имён уже сложен
парсером (неquoted -> lower-case, quoted -> как есть).

Две формы одной проверки:
- validate_no_duplicate_tables: исключение DuplicateTableError
- validate_duplicate_tables_as_diagnostics: список Diagnostic
"""

from __future__ import annotations

from typing import Dict, List, Optional

from lpcheck.core.constants import ERROR_CODES
from lpcheck.core.exceptions import DuplicateTableError
from lpcheck.core.models import Schema, SourceLocation, Table
from lpcheck.utils.naming import quote_name

from .diagnostics import Diagnostic


def group_tables_by_key(schema: Schema) -> Dict[str, List[Table]]:
    """Ключ -> все вхождения в порядке появления в схеме."""
    groups: Dict[str, List[Table]] = {}
    for table in schema.tables:
        groups.setdefault(table.get_key(), []).append(table)
    return groups


def find_duplicate_tables(schema: Schema) -> Dict[str, List[Table]]:
    return {key: tables for key, tables in group_tables_by_key(schema).items() if len(tables) > 1}


def validate_no_duplicate_tables(schema: Schema) -> None:
    duplicates = find_duplicate_tables(schema)
    if not duplicates:
        return

    messages: List[str] = []
    locations_by_key: Dict[str, List[Optional[SourceLocation]]] = {}

    for key, tables in duplicates.items():
        locations_by_key[key] = [t.source_location for t in tables]
        rendered = [str(t.source_location) for t in tables if t.source_location is not None]

        if rendered:
            messages.append(f"table {quote_name(key)} is defined multiple times at: {', '.join(rendered)}")
        else:
            messages.append(f"table {quote_name(key)} is defined multiple times")

    raise DuplicateTableError("; ".join(messages), locations_by_key)


def validate_duplicate_tables_as_diagnostics(schema: Schema) -> List[Diagnostic]:
    diagnostics: List[Diagnostic] = []

    for key, tables in find_duplicate_tables(schema).items():
        for i, table in enumerate(tables):
            if i == 0:
                message = f"Table {quote_name(key)} is defined multiple times (first occurrence)"
            else:
                message = f"Table {quote_name(key)} is already defined (duplicate definition)"

            diagnostics.append(
                Diagnostic.at(message, table.source_location, code=ERROR_CODES["DUPLICATE_TABLE"])
            )

    return diagnostics
