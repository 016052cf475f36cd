"""
lpcheck: загрузка и проверка файлов схемы PostgreSQL (.lp.sql).
"""

from lpcheck.core.constants import VERSION

__version__ = VERSION
