"""
Пакет loader: поиск файлов схемы .lp.sql и сборка единой схемы.
"""

from .schema_loader import (
    discover_schema_files,
    is_schema_file,
    load_schema,
    load_schema_from_string,
)

__all__ = [
    "discover_schema_files",
    "is_schema_file",
    "load_schema",
    "load_schema_from_string",
]
