"""Pytest configuration for test isolation.

The client resolves its bearer token from the environment or a token file in
the user's home directory, and the CLI loads ``.env`` from the working
directory. To keep tests hermetic, every test gets a clean credential
environment, a token file path inside its own temporary directory, and runs
from that directory.
"""

from __future__ import annotations

import os
from pathlib import Path

import pytest

_ENV_VARS = (
    "STARLING_ACCESS_TOKEN",
    "STARLING_TOKEN_FILE",
    "STARLING_API_URL",
    "STARLING_TIMEOUT",
    "STARLING_INCLUDE_ACCOUNTS",
    "STARLING_BALANCE_CONCURRENCY",
    "STARLING_SPACES_LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _isolate_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("STARLING_TOKEN_FILE", os.fspath(tmp_path / "missing-token"))
    monkeypatch.chdir(tmp_path)
