"""
Загрузка схемы из файлов .lp.sql.

Путь может быть:
- файлом с суффиксом .lp.sql (без учёта регистра)
- каталогом: неглубокий обход, подкаталоги и симлинки пропускаются

Файлы обрабатываются в порядке сортировки полных путей; таблицы
добавляются в общую схему в порядке файлов, внутри файла в порядке
операторов. Проверка дубликатов выполняется один раз над всей схемой.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import List, Union

from lpcheck.core.constants import SCHEMA_FILE_SUFFIX
from lpcheck.core.exceptions import (
    NoSchemaFilesFoundError,
    ParseError,
    SchemaFileReadError,
    UnsupportedPathError,
)
from lpcheck.core.logging import get_logger
from lpcheck.core.models import Dialect, Schema
from lpcheck.detection.duplicates import validate_no_duplicate_tables
from lpcheck.parser.sql_parser import SQLParser

logger = get_logger(__name__)

PathLike = Union[str, os.PathLike]


def is_schema_file(name: str) -> bool:
    return name.lower().endswith(SCHEMA_FILE_SUFFIX)


# ==========================================================
# PUBLIC API
# ==========================================================

def load_schema(path: PathLike, validate: bool = True) -> Schema:
    """
    Загружает схему из файла или каталога.

    validate=False отключает проверку дубликатов (нужно конвейеру проверки,
    чтобы получить позиции всех определений до валидации).
    """
    path_str = os.fspath(path)

    if os.path.isdir(path_str):
        schema = _load_directory(path_str)
    elif os.path.exists(path_str) and is_schema_file(path_str):
        schema = _load_file(path_str, "failed to parse SQL DDL")
    else:
        raise UnsupportedPathError(path_str)

    if validate:
        validate_no_duplicate_tables(schema)

    logger.info("schema_loaded", path=path_str, tables=len(schema.tables))
    return schema


def load_schema_from_string(sql_text: str, filename: str = "", validate: bool = True) -> Schema:
    """Схема из SQL-текста в памяти (filename попадает в позиции таблиц)."""
    schema = _parse(sql_text, filename, "failed to parse SQL DDL")
    if validate:
        validate_no_duplicate_tables(schema)
    return schema


def discover_schema_files(directory: PathLike) -> List[str]:
    """Отсортированный список файлов схемы верхнего уровня каталога."""
    dir_str = os.fspath(directory)
    try:
        entries = list(os.scandir(dir_str))
    except OSError as e:
        raise SchemaFileReadError(
            f"failed to read schema directory {dir_str}: {e}",
            file_path=dir_str,
            operation="list",
        ) from e

    files: List[str] = []
    for entry in entries:
        if entry.is_symlink():
            continue
        if entry.is_dir(follow_symlinks=False):
            continue
        if is_schema_file(entry.name):
            files.append(os.path.join(dir_str, entry.name))

    files.sort()
    return files


# ==========================================================
# HELPERS
# ==========================================================

def _load_directory(directory: str) -> Schema:
    files = discover_schema_files(directory)
    if not files:
        raise NoSchemaFilesFoundError(directory)

    logger.debug("schema_files_discovered", directory=directory, files=len(files))

    combined = Schema(dialect=Dialect.POSTGRES)
    for file_path in files:
        combined.extend(_load_file(file_path, f"failed to parse SQL file {file_path}"))

    return combined


def _load_file(file_path: str, parse_context: str) -> Schema:
    try:
        sql_text = Path(file_path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise SchemaFileReadError(
            f"failed to read SQL file {file_path}: {e}",
            file_path=file_path,
            operation="read",
        ) from e

    schema = _parse(sql_text, file_path, parse_context)
    logger.debug("schema_file_loaded", file=file_path, tables=len(schema.tables))
    return schema


def _parse(sql_text: str, filename: str, parse_context: str) -> Schema:
    try:
        return SQLParser().parse_sql_schema(sql_text, Dialect.POSTGRES, filename)
    except ParseError as e:
        raise ParseError(
            f"{parse_context}: {e.message}",
            location=e.location,
            position=e.details.get("position"),
        ) from e
