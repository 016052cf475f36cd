"""
Пользовательские исключения загрузки и проверки схемы.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from .models import SourceLocation


class SchemaCheckError(Exception):
    """Базовое исключение для загрузки и проверки схемы."""

    def __init__(
        self,
        message: str,
        code: str = "UNKNOWN",
        details: Optional[dict] = None,
        location: Optional[SourceLocation] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or {}
        self.location = location
        super().__init__(self.message)

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"

    def to_dict(self) -> dict:
        data: Dict[str, Any] = {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }
        if self.location is not None:
            data["location"] = self.location.to_dict()
        return data


class ParseError(SchemaCheckError):
    """SQL-текст отвергнут парсером."""

    def __init__(self, message: str, location: Optional[SourceLocation] = None, position: Optional[int] = None):
        details: Dict[str, Any] = {}
        if position is not None:
            details["position"] = position
        super().__init__(message, "PARSE_ERROR", details, location)


class MissingRelationError(SchemaCheckError):
    """CREATE/ALTER TABLE без целевой таблицы."""

    def __init__(self, statement: str):
        super().__init__(f"{statement} missing relation", "MISSING_RELATION", {"statement": statement})


class MissingColumnNameError(SchemaCheckError):
    """Определение колонки без имени."""

    def __init__(self, table_name: str = None):
        details: Dict[str, Any] = {}
        if table_name:
            details["table_name"] = table_name
        super().__init__("column missing name", "MISSING_COLUMN_NAME", details)


class UnsupportedPathError(SchemaCheckError):
    """Путь не является файлом схемы или каталогом."""

    def __init__(self, path: str):
        super().__init__("did not find .lp.sql file(s)", "UNSUPPORTED_PATH", {"path": path})


class NoSchemaFilesFoundError(SchemaCheckError):
    """В каталоге нет ни одного файла схемы."""

    def __init__(self, directory: str):
        super().__init__(
            f"no .lp.sql files found in directory {directory}",
            "NO_SCHEMA_FILES",
            {"directory": directory},
        )


class SchemaFileReadError(SchemaCheckError):
    """Ошибка чтения файла или каталога схемы."""

    def __init__(self, message: str, file_path: str = None, operation: str = None):
        details: Dict[str, Any] = {}
        if file_path:
            details["file_path"] = file_path
        if operation:
            details["operation"] = operation
        super().__init__(message, "FILE_READ_ERROR", details)


class UnsupportedDialectError(SchemaCheckError):
    def __init__(self, dialect: Any):
        super().__init__(f"unsupported dialect {dialect}", "UNSUPPORTED_DIALECT", {"dialect": str(dialect)})


class DuplicateTableError(SchemaCheckError):
    """
    Одна и та же таблица определена несколько раз.

    duplicates: ключ "schema.table" -> список позиций всех вхождений.
    """

    def __init__(self, message: str, duplicates: Dict[str, List[Optional[SourceLocation]]]):
        super().__init__(
            message,
            "DUPLICATE_TABLE",
            {"tables": sorted(duplicates)},
        )
        self.duplicates = duplicates


def handle_exception(exception: Exception) -> dict:
    if isinstance(exception, SchemaCheckError):
        return exception.to_dict()
    return {
        "error": str(exception),
        "code": "UNKNOWN_ERROR",
        "details": {
            "exception_type": exception.__class__.__name__,
        },
    }
