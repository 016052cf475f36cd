"""
Константы проверки файлов схемы PostgreSQL.
"""

# Версия системы
VERSION = "0.3.0"
TOOL_NAME = "lpcheck"

# Файлы схемы распознаются по суффиксу имени (без учёта регистра)
SCHEMA_FILE_SUFFIX = ".lp.sql"

# Схема по умолчанию для неквалифицированных имён таблиц
DEFAULT_SCHEMA = "public"

# Внутренний квалификатор системного каталога в именах типов
CATALOG_QUALIFIER = "pg_catalog"

# Заглушка для выражений, которые не удаётся отформатировать обратно в SQL
UNDEFINED_EXPRESSION = "UNDEFINED_EXPRESSION"

# Уровни диагностик
SEVERITY_ERROR = "error"
SEVERITY_WARNING = "warning"
SEVERITY_INFO = "info"

# Коды ошибок
ERROR_CODES = {
    'UNKNOWN': 'UNKNOWN',
    'PARSE_ERROR': 'PARSE_ERROR',
    'MISSING_RELATION': 'MISSING_RELATION',
    'MISSING_COLUMN_NAME': 'MISSING_COLUMN_NAME',
    'UNSUPPORTED_PATH': 'UNSUPPORTED_PATH',
    'NO_SCHEMA_FILES': 'NO_SCHEMA_FILES',
    'FILE_READ_ERROR': 'FILE_READ_ERROR',
    'UNSUPPORTED_DIALECT': 'UNSUPPORTED_DIALECT',
    'DUPLICATE_TABLE': 'DUPLICATE_TABLE',
}
