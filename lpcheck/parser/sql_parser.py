"""
Понижение DDL PostgreSQL в модель Schema/Table/Column.

Разбор SQL выполняет pglast (парсер самого PostgreSQL, libpg_query):
любая синтаксическая ошибка отвергает весь текст целиком.

ВАЖНО:
- схема таблицы сохраняется как в SQL (пустая строка, если не указана);
  правило "пустая = public" применяется только при сравнении
- ALTER TABLE на неизвестную таблицу: тихий no-op (таблица может
  появиться позже или уже существовать в базе)
- из ALTER TABLE учитываются только ENABLE/DISABLE ROW LEVEL SECURITY
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

import sqlparse
from pglast import ast, parse_sql
from pglast.enums.parsenodes import AlterTableType, ConstrType
from pglast.parser import ParseError as PostgresParseError
from sqlparse import tokens as T

from lpcheck.core.constants import CATALOG_QUALIFIER
from lpcheck.core.exceptions import (
    MissingColumnNameError,
    MissingRelationError,
    ParseError,
    UnsupportedDialectError,
)
from lpcheck.core.logging import get_logger
from lpcheck.core.models import Column, Dialect, Schema, SourceLocation, Table
from lpcheck.utils.positions import byte_offset, offset_to_line_column
from lpcheck.utils.type_names import normalize_postgres_type

from .expressions import format_expr

logger = get_logger(__name__)


@dataclass(frozen=True)
class LoweringContext:
    """Исходный текст и имя файла для вычисления позиций."""

    sql: str
    filename: str = ""

    def location_at(self, index: int) -> SourceLocation:
        """index: позиция символа в sql; строка и колонка считаются по байтам."""
        line, column = offset_to_line_column(self.sql, byte_offset(self.sql, index))
        return SourceLocation(file=self.filename, line=line, column=column)


def statement_start(sql: str, location: int, length: int) -> int:
    """
    Позиция первого значимого токена оператора.

    Парсер отдаёт начало оператора сразу после предыдущей ';', вместе с
    пробелами и комментариями перед ним; их пропускает лексер sqlparse.
    length == 0 означает "до конца текста".
    """
    end = location + length if length else len(sql)
    index = location

    for statement in sqlparse.parse(sql[location:end])[:1]:
        for token in statement.flatten():
            if not token.is_whitespace and token.ttype not in T.Comment:
                return index
            index += len(token.value)

    return location


class SQLParser:
    # ==========================================================
    # PUBLIC API
    # ==========================================================

    def parse_sql_schema(
        self,
        sql_text: str,
        dialect: Dialect = Dialect.POSTGRES,
        filename: str = "",
    ) -> Schema:
        if dialect != Dialect.POSTGRES:
            raise UnsupportedDialectError(getattr(dialect, "value", dialect))

        ctx = LoweringContext(sql=sql_text, filename=filename)

        try:
            stmts = parse_sql(sql_text)
        except PostgresParseError as e:
            message = e.args[0] if e.args else str(e)
            # позиция курсора у PostgreSQL считается с 1
            cursorpos = e.args[1] if len(e.args) > 1 and e.args[1] else 1
            index = cursorpos - 1
            raise ParseError(
                f"failed to parse SQL: {message}",
                location=ctx.location_at(index),
                position=byte_offset(sql_text, index),
            ) from e

        schema = Schema(dialect=Dialect.POSTGRES)

        for raw in stmts:
            stmt = raw.stmt
            if isinstance(stmt, ast.CreateStmt):
                start = statement_start(sql_text, raw.stmt_location or 0, raw.stmt_len or 0)
                schema.tables.append(self._lower_create_table(stmt, ctx, start))
            elif isinstance(stmt, ast.AlterTableStmt):
                self._lower_alter_table(schema, stmt)

        logger.debug(
            "sql_lowered",
            file=filename,
            statements=len(stmts),
            tables=len(schema.tables),
        )
        return schema

    # ==========================================================
    # CREATE TABLE
    # ==========================================================

    def _lower_create_table(self, stmt: ast.CreateStmt, ctx: LoweringContext, start: int) -> Table:
        if stmt.relation is None:
            raise MissingRelationError("CREATE TABLE")

        table = Table(
            name=stmt.relation.relname or "",
            schema=stmt.relation.schemaname or "",
            source_location=ctx.location_at(start),
        )

        for elt in stmt.tableElts or ():
            # Табличные ограничения и LIKE в модель не попадают
            if isinstance(elt, ast.ColumnDef):
                table.columns.append(self._lower_column_def(elt, table.name, ctx.sql))

        return table

    # ==========================================================
    # COLUMN
    # ==========================================================

    def _lower_column_def(self, col_def: ast.ColumnDef, table_name: str = "", source: str = "") -> Column:
        if not col_def.colname:
            raise MissingColumnNameError(table_name)

        column = Column(name=col_def.colname)

        if col_def.typeName is not None:
            column.type = self._format_type_name(col_def.typeName)

        for constraint in col_def.constraints or ():
            if isinstance(constraint, ast.Constraint):
                self._apply_column_constraint(column, constraint, source)

        return column

    def _apply_column_constraint(self, column: Column, constraint: ast.Constraint, source: str = "") -> None:
        """Ограничения применяются по порядку: последнее NULL/NOT NULL побеждает."""
        if constraint.contype == ConstrType.CONSTR_NOTNULL:
            column.nullable = False

        elif constraint.contype == ConstrType.CONSTR_NULL:
            column.nullable = True

        elif constraint.contype == ConstrType.CONSTR_DEFAULT:
            if constraint.raw_expr is not None:
                column.default = format_expr(constraint.raw_expr, source)

        elif constraint.contype == ConstrType.CONSTR_PRIMARY:
            column.is_primary_key = True
            column.nullable = False

    # ==========================================================
    # TYPES
    # ==========================================================

    def _format_type_name(self, type_name: ast.TypeName) -> str:
        parts: List[str] = [n.sval for n in type_name.names or () if isinstance(n, ast.String)]
        if not parts:
            return ""

        type_str = ".".join(parts)
        if len(parts) > 1 and parts[0] == CATALOG_QUALIFIER:
            type_str = parts[-1]

        type_str = normalize_postgres_type(type_str)

        mods = [
            str(mod.val.ival or 0)
            for mod in type_name.typmods or ()
            if isinstance(mod, ast.A_Const) and isinstance(mod.val, ast.Integer)
        ]
        if mods:
            type_str = f"{type_str}({','.join(mods)})"

        if type_name.arrayBounds:
            type_str += "[]"

        return type_str

    # ==========================================================
    # ALTER TABLE
    # ==========================================================

    def _lower_alter_table(self, schema: Schema, stmt: ast.AlterTableStmt) -> None:
        if stmt.relation is None:
            raise MissingRelationError("ALTER TABLE")

        relname = stmt.relation.relname or ""
        schemaname = stmt.relation.schemaname or ""

        table: Optional[Table] = schema.find_table(relname, schemaname)
        if table is None:
            logger.debug("alter_table_target_not_found", table=relname, schema=schemaname)
            return

        for cmd in stmt.cmds or ():
            if not isinstance(cmd, ast.AlterTableCmd):
                continue
            if cmd.subtype == AlterTableType.AT_EnableRowSecurity:
                table.rls_enabled = True
            elif cmd.subtype == AlterTableType.AT_DisableRowSecurity:
                table.rls_enabled = False
