"""
parser package: понижение DDL PostgreSQL (дерево pglast) в модель
"""

from .expressions import format_expr
from .sql_parser import LoweringContext, SQLParser, statement_start

__all__ = [
    "LoweringContext",
    "SQLParser",
    "format_expr",
    "statement_start",
]
