"""
Структура отчёта проверки схемы: Diagnostic / Summary / CheckOutput.

Формат JSON стабилен (его читают интеграции редакторов):
- diagnostics опускается, если список пуст
- warnings, code, file, line, column опускаются при нулевом/пустом значении
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from lpcheck.core.constants import SEVERITY_ERROR, SEVERITY_WARNING
from lpcheck.core.models import SourceLocation


@dataclass
class Diagnostic:
    message: str
    severity: str = SEVERITY_ERROR
    code: str = ""
    file: str = ""
    line: int = 0
    column: int = 0

    @classmethod
    def at(
        cls,
        message: str,
        location: Optional[SourceLocation],
        severity: str = SEVERITY_ERROR,
        code: str = "",
        default_file: str = "",
    ) -> "Diagnostic":
        """Диагностика в позиции location; без позиции: строка 1, колонка 1."""
        if location is None:
            return cls(message, severity, code, default_file, 1, 1)
        return cls(message, severity, code, location.file or default_file, location.line, location.column)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.code:
            data["code"] = self.code
        data["message"] = self.message
        data["severity"] = self.severity
        if self.file:
            data["file"] = self.file
        if self.line:
            data["line"] = self.line
        if self.column:
            data["column"] = self.column
        return data


@dataclass
class Summary:
    errors: int = 0
    warnings: int = 0
    valid: bool = True

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"errors": self.errors}
        if self.warnings:
            data["warnings"] = self.warnings
        data["valid"] = self.valid
        return data


@dataclass
class CheckOutput:
    diagnostics: List[Diagnostic] = field(default_factory=list)
    summary: Summary = field(default_factory=Summary)

    def add(self, diagnostic: Diagnostic) -> None:
        self.diagnostics.append(diagnostic)
        if diagnostic.severity == SEVERITY_ERROR:
            self.summary.errors += 1
            self.summary.valid = False
        elif diagnostic.severity == SEVERITY_WARNING:
            self.summary.warnings += 1

    def add_error(self, message: str, file: str = "", line: int = 0, column: int = 0, code: str = "") -> None:
        self.add(Diagnostic(message, SEVERITY_ERROR, code, file, line, column))

    def add_warning(self, message: str, file: str = "", line: int = 0, column: int = 0, code: str = "") -> None:
        self.add(Diagnostic(message, SEVERITY_WARNING, code, file, line, column))

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.diagnostics:
            data["diagnostics"] = [d.to_dict() for d in self.diagnostics]
        data["summary"] = self.summary.to_dict()
        return data

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)
