"""
Форматирование выражений DEFAULT обратно в SQL-текст.

Функция никогда не падает: для нераспознанного узла возвращается
маркер UNDEFINED_EXPRESSION.
"""

from __future__ import annotations

from typing import Optional

from pglast import ast
from pglast.enums.primnodes import CoercionForm, SQLValueFunctionOp

from lpcheck.core.constants import CATALOG_QUALIFIER, UNDEFINED_EXPRESSION


def format_expr(node: Optional[ast.Node], source: str = "") -> str:
    """
    Узел выражения -> SQL-текст.

    Приведение типа прозрачно (печатается аргумент), у вызова функции
    используется только первый сегмент имени. Если передан исходный текст,
    имя функции печатается в том написании, в каком оно стоит в исходнике
    (парсер складывает неquoted имена в lower-case).
    """
    if node is None:
        return ""

    if isinstance(node, ast.A_Const):
        return _format_const(node)

    if isinstance(node, ast.FuncCall):
        return _format_func_call(node, source)

    if isinstance(node, ast.TypeCast):
        if node.arg is None:
            return UNDEFINED_EXPRESSION
        return format_expr(node.arg, source)

    if isinstance(node, ast.SQLValueFunction):
        return _value_function_keyword(node.op)

    return UNDEFINED_EXPRESSION


def _format_const(const: ast.A_Const) -> str:
    val = const.val

    if isinstance(val, ast.Integer):
        return str(val.ival or 0)
    if isinstance(val, ast.Float):
        return val.fval
    if isinstance(val, ast.String):
        return f"'{val.sval}'"
    if isinstance(val, ast.BitString):
        return val.bsval
    if isinstance(val, ast.Boolean):
        return "true" if val.boolval else "false"
    if const.isnull:
        return "NULL"
    return UNDEFINED_EXPRESSION


def _format_func_call(call: ast.FuncCall, source: str) -> str:
    if not call.funcname or not isinstance(call.funcname[0], ast.String):
        return UNDEFINED_EXPRESSION

    names = [n.sval for n in call.funcname if isinstance(n, ast.String)]

    # CURRENT_USER, SESSION_USER, CURRENT_SCHEMA и т.п. парсер отдаёт
    # как вызов pg_catalog.<имя> с SQL-синтаксисом
    if (
        call.funcformat == CoercionForm.COERCE_SQL_SYNTAX
        and not call.args
        and len(names) == 2
        and names[0] == CATALOG_QUALIFIER
    ):
        return names[1].upper()

    name = _written_spelling(names[0], call.location, source)
    args = [format_expr(arg, source) for arg in call.args or ()]
    return f"{name}({', '.join(args)})"


def _written_spelling(name: str, location: Optional[int], source: str) -> str:
    if not source or location is None or location < 0:
        return name
    written = source[location:location + len(name)]
    if written.lower() == name:
        return written
    return name


def _value_function_keyword(op) -> str:
    """SVFOP_CURRENT_TIMESTAMP_N -> CURRENT_TIMESTAMP: точность не печатается."""
    try:
        name = SQLValueFunctionOp(op).name
    except ValueError:
        return UNDEFINED_EXPRESSION

    keyword = name[len("SVFOP_"):]
    if keyword.endswith("_N"):
        keyword = keyword[:-len("_N")]
    return keyword
