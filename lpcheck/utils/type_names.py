"""
Нормализация внутренних имён типов PostgreSQL.

Парсер PostgreSQL переписывает стандартные SQL-типы во внутренние имена
каталога (INTEGER -> int4, BOOLEAN -> bool, TIMESTAMP WITH TIME ZONE ->
timestamptz). Здесь они возвращаются к каноническим SQL-именам.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Mapping


# Таблица строится один раз и доступна только для чтения
TYPE_ALIASES: Mapping[str, str] = MappingProxyType({
    # Целочисленные типы
    "int2": "smallint",
    "int4": "integer",
    "int8": "bigint",
    "serial": "serial",
    "serial2": "smallserial",
    "serial4": "serial",
    "serial8": "bigserial",

    # Логический тип
    "bool": "boolean",

    # Строковые типы
    "varchar": "varchar",
    "bpchar": "char",

    # Числа с плавающей точкой
    "float4": "real",
    "float8": "double precision",

    # Дата и время
    "timestamp": "timestamp without time zone",
    "timestamptz": "timestamp with time zone",
    "time": "time without time zone",
    "timetz": "time with time zone",

    # Явно оставляем как есть
    "text": "text",
    "numeric": "numeric",
    "decimal": "decimal",
})


def normalize_postgres_type(pg_type: str) -> str:
    """
    Внутреннее имя -> каноническое SQL-имя.

    Сравнение без учёта регистра; неизвестные имена возвращаются без изменений.
    """
    return TYPE_ALIASES.get(pg_type.lower(), pg_type)
