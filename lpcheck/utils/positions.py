"""
Перевод смещения в тексте SQL в пару (строка, колонка), обе с 1.

Смещения байтовые (UTF-8), как у парсера PostgreSQL: колонка считается
в байтах от начала строки.
"""

from __future__ import annotations

from typing import Tuple


def byte_offset(sql: str, index: int) -> int:
    """Индекс символа в строке -> смещение в байтах UTF-8."""
    if index <= 0:
        return 0
    return len(sql[:index].encode("utf-8"))


def offset_to_line_column(sql: str, offset: int) -> Tuple[int, int]:
    """
    Линейный проход по байтам текста до offset с подсчётом переводов строк.

    Отрицательное смещение или смещение за концом текста даёт (1, 1).
    Вызывается один раз на оператор верхнего уровня, не на токен.
    """
    data = sql.encode("utf-8")
    if offset < 0 or offset > len(data):
        return 1, 1

    line = 1
    column = 1

    for byte in data[:offset]:
        if byte == 0x0A:
            line += 1
            column = 1
        else:
            column += 1

    return line, column
