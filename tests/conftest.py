"""Shared pytest fixtures for all tests."""

from pathlib import Path
from typing import Callable, Optional

import pytest

from lpcheck.core.logging import configure_logging


@pytest.fixture(autouse=True)
def quiet_logging() -> None:
    """Keep structured logs out of captured output."""
    configure_logging(log_level="WARNING", show_timestamps=False)


@pytest.fixture
def write_schema(tmp_path: Path) -> Callable[..., Path]:
    """Write a schema file under tmp_path (or a given directory) and return its path."""

    def _write(name: str, sql: str, directory: Optional[Path] = None) -> Path:
        target = (directory or tmp_path) / name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(sql, encoding="utf-8")
        return target

    return _write


@pytest.fixture
def users_sql() -> str:
    """The reference users table."""
    return (
        "CREATE TABLE users (\n"
        "    id BIGINT PRIMARY KEY,\n"
        "    email TEXT NOT NULL,\n"
        "    created_at TIMESTAMP WITH TIME ZONE DEFAULT NOW()\n"
        ");\n"
    )
