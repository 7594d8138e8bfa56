from pathlib import Path

import pytest

from src.api import main
from src.rules.loader import RULES_PATH_ENV


def test_rest_namespace_from_rules_file(tmp_path: Path, monkeypatch) -> None:
    p = tmp_path / "rules.yaml"
    p.write_text("social_share:\n  rest_namespace: /acme/v2/\n")
    monkeypatch.setenv(RULES_PATH_ENV, str(p))

    assert main._rest_namespace() == "acme/v2"


def test_rest_namespace_defaults_without_file(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv(RULES_PATH_ENV, str(tmp_path / "missing.yaml"))

    assert main._rest_namespace() == "undisclosed/v1"


def test_invalid_rules_exit_instead_of_raising(tmp_path: Path, monkeypatch, caplog) -> None:
    p = tmp_path / "rules.yaml"
    p.write_text("social_share: {bogus: 1}\n")
    monkeypatch.setenv(RULES_PATH_ENV, str(p))

    with caplog.at_level("CRITICAL"), pytest.raises(SystemExit) as exc_info:
        main._rest_namespace()

    assert exc_info.value.code == 1
    assert "Rules load failed" in caplog.text
