"""Regression tests for optional CLI dependencies (rich/questionary/PyYAML).

These tests verify bootstrap commands are resilient when optional
packages are missing, and rendering paths fail cleanly only when they
are actually exercised.
"""

from __future__ import annotations

import sys
from unittest.mock import MagicMock

import pytest

from conftest import FakeGardenProvider
from garden_examiner.cli import app as app_module
from garden_examiner.cli import exit_codes
from garden_examiner.cli.app import main
from garden_examiner.exceptions import EnvironmentError


def _hide_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "rich", None)
    monkeypatch.setitem(sys.modules, "rich.console", None)
    monkeypatch.setitem(sys.modules, "rich.table", None)
    monkeypatch.setitem(sys.modules, "rich.logging", None)
    monkeypatch.setitem(sys.modules, "rich.markup", None)


def _hide_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setitem(sys.modules, "questionary", None)


@pytest.fixture
def provider_factory(
    monkeypatch: pytest.MonkeyPatch, garden: FakeGardenProvider,
) -> MagicMock:
    for variable in ("GEX_SHOOT", "GEX_SEED", "GEX_PROFILE", "GEX_PROJECT"):
        monkeypatch.delenv(variable, raising=False)
    factory = MagicMock(return_value=garden)
    monkeypatch.setattr(app_module, "_create_provider", factory)
    return factory


def test_help_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--help"])
    assert exc_info.value.code == 0


def test_version_works_without_rich_or_questionary(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)
    _hide_questionary(monkeypatch)

    with pytest.raises(SystemExit) as exc_info:
        main(["--version"])
    assert exc_info.value.code == 0


def test_doctor_works_without_rich(monkeypatch: pytest.MonkeyPatch) -> None:
    _hide_rich(monkeypatch)

    code = main(["doctor"])
    assert code in (exit_codes.SUCCESS, exit_codes.GENERAL_ERROR)


def test_json_works_without_rich(
    monkeypatch: pytest.MonkeyPatch,
    provider_factory: MagicMock,
    capsys: pytest.CaptureFixture[str],
) -> None:
    _hide_rich(monkeypatch)

    assert main(["seed", "get", "-o", "json"]) == exit_codes.SUCCESS
    assert "aws-eu1" in capsys.readouterr().out


def test_table_errors_cleanly_when_rich_missing(
    monkeypatch: pytest.MonkeyPatch, provider_factory: MagicMock,
) -> None:
    _hide_rich(monkeypatch)

    with pytest.raises(EnvironmentError, match="rich is not installed"):
        main(["seed", "get"])


def test_yaml_errors_cleanly_when_pyyaml_missing(
    monkeypatch: pytest.MonkeyPatch, provider_factory: MagicMock,
) -> None:
    monkeypatch.setitem(sys.modules, "yaml", None)

    with pytest.raises(EnvironmentError, match="PyYAML is not installed"):
        main(["seed", "get", "-o", "yaml"])


def test_interactive_select_errors_cleanly_when_questionary_missing(
    monkeypatch: pytest.MonkeyPatch, provider_factory: MagicMock,
) -> None:
    _hide_questionary(monkeypatch)

    with pytest.raises(EnvironmentError, match="questionary is not installed"):
        main(["project", "select", "-i"])
