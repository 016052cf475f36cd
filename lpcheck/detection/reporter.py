"""
reporter.py

Экспорт результата проверки схемы.

Форматы:
- json: стабильный формат CheckOutput (для интеграций редакторов)
- text: строка "путь: valid|invalid (N errors)" и по строке на диагностику
  в виде file:line:column: severity: message
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional, Union

from .diagnostics import CheckOutput, Diagnostic


class Reporter:
    """Экспортёр отчётов проверки схемы."""

    FORMATS = ("json", "text")

    def __init__(self, indent: int = 2):
        self.indent = indent

    # ---------------------------------------------------------------------
    # EXPORT
    # ---------------------------------------------------------------------

    def export(
            self,
            output: CheckOutput,
            *,
            format: str = "json",
            path: str = "",
            output_file: Optional[Union[str, Path]] = None
    ) -> str:
        """
        Экспорт отчёта в заданном формате.

        Args:
            output: результат SchemaChecker.run
            format: json | text
            path: проверенный путь (заголовок текстового отчёта)
            output_file: если задан: сохраняет в файл и возвращает пустую строку

        Returns:
            строка отчёта (если output_file=None)
        """
        fmt = (format or "json").lower().strip()

        if fmt == "json":
            rendered = output.to_json(indent=self.indent)
        elif fmt == "text":
            rendered = self._export_text(output, path)
        else:
            raise ValueError(f"unsupported report format: {format}. Available: {', '.join(self.FORMATS)}")

        if output_file:
            target = Path(output_file)
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(rendered, encoding="utf-8")
            return ""
        return rendered

    def _export_text(self, output: CheckOutput, path: str) -> str:
        summary = output.summary
        title = path or "schema"

        out: List[str] = []
        if summary.valid:
            out.append(f"{title}: valid")
        else:
            noun = "error" if summary.errors == 1 else "errors"
            out.append(f"{title}: invalid ({summary.errors} {noun})")

        for diagnostic in output.diagnostics:
            out.append(self._format_diagnostic(diagnostic))

        return "\n".join(out)

    def _format_diagnostic(self, diagnostic: Diagnostic) -> str:
        position = diagnostic.file
        if diagnostic.line:
            position = f"{position}:{diagnostic.line}" if position else f"line {diagnostic.line}"
            if diagnostic.column:
                position = f"{position}:{diagnostic.column}"

        prefix = f"{position}: " if position else ""
        return f"{prefix}{diagnostic.severity}: {diagnostic.message}"
