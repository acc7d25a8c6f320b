from pathlib import Path

import pytest

from starling_spaces.credentials import resolve_token
from starling_spaces.errors import ConfigurationError


def test_env_token_wins(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setenv("STARLING_ACCESS_TOKEN", "  from-env  ")
    assert resolve_token() == "from-env"


def test_token_file_fallback(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    token_file = tmp_path / "token"
    token_file.write_text("from-file\n", encoding="utf-8")
    monkeypatch.setenv("STARLING_TOKEN_FILE", str(token_file))
    assert resolve_token() == "from-file"


def test_missing_token_raises_configuration_error():
    with pytest.raises(ConfigurationError, match="STARLING_ACCESS_TOKEN"):
        resolve_token()


def test_empty_token_file_raises_configuration_error(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
):
    token_file = tmp_path / "token"
    token_file.write_text("   \n", encoding="utf-8")
    monkeypatch.setenv("STARLING_TOKEN_FILE", str(token_file))
    with pytest.raises(ConfigurationError, match="empty"):
        resolve_token()
