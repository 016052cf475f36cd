# lpcheck/core/__init__.py

from .models import (
    Column,
    Dialect,
    Schema,
    SourceLocation,
    Table,
)

from .exceptions import (
    DuplicateTableError,
    MissingColumnNameError,
    MissingRelationError,
    NoSchemaFilesFoundError,
    ParseError,
    SchemaCheckError,
    SchemaFileReadError,
    UnsupportedDialectError,
    UnsupportedPathError,
)

__all__ = [
    # models
    "Column",
    "Dialect",
    "Schema",
    "SourceLocation",
    "Table",

    # exceptions
    "DuplicateTableError",
    "MissingColumnNameError",
    "MissingRelationError",
    "NoSchemaFilesFoundError",
    "ParseError",
    "SchemaCheckError",
    "SchemaFileReadError",
    "UnsupportedDialectError",
    "UnsupportedPathError",
]
