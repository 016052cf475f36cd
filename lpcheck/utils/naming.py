"""
utils/naming.py

Утилиты для работы с именами таблиц и стабильными ключами.

Принцип:
- PostgreSQL неquoted идентификаторы приводит к lower-case.
- quoted идентификаторы ("User") сохраняют регистр и символы.

Важно: ключи сравниваются как точные строки, поэтому складывание регистра
выполняется один раз, при разборе, а не при сравнении.
"""

from __future__ import annotations

from typing import Optional

from lpcheck.core.constants import DEFAULT_SCHEMA


def is_quoted_identifier(identifier: str) -> bool:
    """True если идентификатор заключён в двойные кавычки."""
    if not identifier:
        return False
    s = identifier.strip()
    return len(s) >= 2 and s[0] == '"' and s[-1] == '"'


def strip_quotes(identifier: str) -> str:
    """Убирает внешние двойные кавычки и раскрывает удвоенные "" внутри."""
    s = (identifier or "").strip()
    if is_quoted_identifier(s):
        return s[1:-1].replace('""', '"')
    return s


def fold_identifier(identifier: str) -> str:
    """
    Складывание регистра в стиле PostgreSQL:
    - quoted: содержимое как есть (без внешних кавычек)
    - не quoted: lower-case
    """
    if not identifier:
        return ""
    if is_quoted_identifier(identifier):
        return strip_quotes(identifier)
    return identifier.strip().lower()


def effective_schema(schema: Optional[str]) -> str:
    """Пустая схема -> 'public'. Регистр не меняется."""
    return schema or DEFAULT_SCHEMA


def qualify_table(table: str, schema: Optional[str] = None) -> str:
    """Собирает ключ schema.table."""
    return f"{effective_schema(schema)}.{table}"


def quote_name(name: str) -> str:
    """Имя в двойных кавычках для сообщений: "public.users"."""
    escaped = name.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
