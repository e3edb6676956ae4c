"""Tests for ScriptRunnerSettings."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from sqlscript.config import DEFAULT_DELIMITER, ScriptRunnerSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "STOP_ON_ERROR",
        "THROW_WARNING",
        "AUTO_COMMIT",
        "SEND_FULL_SCRIPT",
        "REMOVE_CRS",
        "ESCAPE_PROCESSING",
        "DELIMITER",
        "FULL_LINE_DELIMITER",
    ):
        monkeypatch.delenv(f"SQLSCRIPT_RUNNER_{name}", raising=False)


def test_defaults() -> None:
    settings = ScriptRunnerSettings(_env_file=None)
    assert settings.stop_on_error is False
    assert settings.throw_warning is False
    assert settings.auto_commit is False
    assert settings.send_full_script is False
    assert settings.remove_crs is False
    assert settings.escape_processing is True
    assert settings.delimiter == DEFAULT_DELIMITER == ";"
    assert settings.full_line_delimiter is False


def test_loads_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SQLSCRIPT_RUNNER_STOP_ON_ERROR", "true")
    monkeypatch.setenv("SQLSCRIPT_RUNNER_DELIMITER", "GO")
    monkeypatch.setenv("SQLSCRIPT_RUNNER_FULL_LINE_DELIMITER", "1")

    settings = ScriptRunnerSettings(_env_file=None)

    assert settings.stop_on_error is True
    assert settings.delimiter == "GO"
    assert settings.full_line_delimiter is True


def test_empty_delimiter_rejected() -> None:
    with pytest.raises(ValidationError):
        ScriptRunnerSettings(_env_file=None, delimiter="")


def test_assignment_is_validated() -> None:
    settings = ScriptRunnerSettings(_env_file=None)
    with pytest.raises(ValidationError):
        settings.delimiter = ""


def test_copy_is_independent() -> None:
    settings = ScriptRunnerSettings(_env_file=None)
    snapshot = settings.model_copy()
    settings.delimiter = "$$"
    assert snapshot.delimiter == ";"
