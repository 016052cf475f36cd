"""
Пакет utils: вспомогательные чистые функции без побочных эффектов.

Состав пакета:
- naming: складывание регистра идентификаторов и ключи schema.table
- positions: смещение в тексте -> строка/колонка
- type_names: внутренние имена типов PostgreSQL -> канонические SQL-имена
"""

from .naming import (
    effective_schema,
    fold_identifier,
    is_quoted_identifier,
    qualify_table,
    quote_name,
    strip_quotes,
)

from .positions import byte_offset, offset_to_line_column

from .type_names import (
    TYPE_ALIASES,
    normalize_postgres_type,
)

__all__ = [
    # naming
    "effective_schema",
    "fold_identifier",
    "is_quoted_identifier",
    "qualify_table",
    "quote_name",
    "strip_quotes",

    # positions
    "byte_offset",
    "offset_to_line_column",

    # type names
    "TYPE_ALIASES",
    "normalize_postgres_type",
]
