from pathlib import Path

import pytest

from src.adapters.sqlite.migrator import SQLiteMigrator
from src.ports.shortener import ShortenerError
from src.rules.loader import load_rules
from src.rules.models import Rules

PROJECT_ROOT = Path(__file__).parent.parent


class FakeShortener:
    """Records shorten calls; providers listed in fail_on raise ShortenerError."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.calls: list[tuple[str, str, str | None]] = []
        self.fail_on = fail_on or set()

    def shorten(self, long_url: str, domain: str, title: str | None = None) -> str:
        self.calls.append((long_url, domain, title))
        for source in self.fail_on:
            if f"utm_source={source}" in long_url:
                raise ShortenerError("rate limited", status_code=429)
        return f"https://{domain}/s{len(self.calls)}"


@pytest.fixture
def migrations_dir() -> str:
    return str(PROJECT_ROOT / "migrations")


@pytest.fixture
def rules() -> Rules:
    """Rules loaded from the project's rules.yaml."""
    return load_rules(PROJECT_ROOT / "rules.yaml")


@pytest.fixture
def db_path(tmp_path, migrations_dir) -> str:
    """Temporary SQLite DB with all migrations applied."""
    path = str(tmp_path / "social_share.db")
    SQLiteMigrator(path, migrations_dir).run_migrations()
    return path


@pytest.fixture
def shortener() -> FakeShortener:
    return FakeShortener()
