from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from lpcheck.utils.naming import effective_schema, qualify_table


class Dialect(Enum):
    POSTGRES = "postgres"


@dataclass(frozen=True)
class SourceLocation:
    """Позиция оператора в исходном файле (строки и колонки с 1)."""

    file: str = ""
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        if self.file:
            return f"{self.file}:{self.line}:{self.column}"
        return f"line {self.line}"

    def to_dict(self) -> Dict[str, Any]:
        return {"file": self.file, "line": self.line, "column": self.column}


@dataclass
class Column:
    name: str
    type: str = ""
    nullable: bool = True
    is_primary_key: bool = False
    default: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "type": self.type,
            "nullable": self.nullable,
            "is_primary_key": self.is_primary_key,
            "default": self.default,
        }


@dataclass
class Table:
    name: str
    # Схема хранится как в исходном SQL; пустая строка = схема по умолчанию
    schema: str = ""
    columns: List[Column] = field(default_factory=list)
    rls_enabled: bool = False
    source_location: Optional[SourceLocation] = None

    @property
    def effective_schema(self) -> str:
        return effective_schema(self.schema)

    def get_key(self) -> str:
        return qualify_table(self.name, self.schema)

    def matches(self, name: str, schema: str = "") -> bool:
        """Совпадение по (schema, name); пустая схема трактуется как public."""
        return self.name == name and self.effective_schema == effective_schema(schema)

    def get_column(self, name: str) -> Optional[Column]:
        for column in self.columns:
            if column.name == name:
                return column
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "schema": self.schema,
            "columns": [c.to_dict() for c in self.columns],
            "rls_enabled": self.rls_enabled,
            "source_location": self.source_location.to_dict() if self.source_location else None,
        }


@dataclass
class Schema:
    tables: List[Table] = field(default_factory=list)
    dialect: Dialect = Dialect.POSTGRES

    def find_table(self, name: str, schema: str = "") -> Optional[Table]:
        for table in self.tables:
            if table.matches(name, schema):
                return table
        return None

    def extend(self, other: Schema) -> None:
        self.tables.extend(other.tables)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tables": [t.to_dict() for t in self.tables],
            "dialect": self.dialect.value,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
