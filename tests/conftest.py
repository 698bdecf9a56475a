# tests/conftest.py

from __future__ import annotations

from pathlib import Path

import pytest

from storage.database.base import get_engine, init_db
from storage.logging_setup import setup_logging
from tasktrail import config as cli_config


@pytest.fixture()
def database_url(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> str:
    """A fresh SQLite file per test; also what the CLI config will pick up."""
    url = f"sqlite:///{tmp_path / 'tasktrail.db'}"
    monkeypatch.setenv("TASKTRAIL_HOME", str(tmp_path))
    monkeypatch.setenv("TASKTRAIL_DATABASE_URL", url)
    monkeypatch.setenv("TASKTRAIL_TIMEZONE", "UTC")
    return url


@pytest.fixture(autouse=True)
def db(database_url: str):
    engine = init_db(database_url)
    cli_config.reset_config()
    yield engine
    cli_config.reset_config()
    get_engine().dispose()
    # CLI runs point loguru at their own (now closed) stderr.
    setup_logging("DEBUG")
