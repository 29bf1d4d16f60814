"""Shared pytest fixtures for the full confscan test suite."""

from __future__ import annotations

from pathlib import Path

import pytest

from tests.fixture_paths import legacy_example_conf_path as resolve_legacy_example_conf_path
from tests.fixture_paths import legacy_options_yaml_path as resolve_legacy_options_yaml_path


@pytest.fixture
def legacy_example_conf_path() -> Path:
    """Provide the example config file path for tests that scan real files."""

    return resolve_legacy_example_conf_path()


@pytest.fixture
def legacy_options_yaml_path() -> Path:
    """Provide the option declarations matching the example config file."""

    return resolve_legacy_options_yaml_path()


@pytest.fixture(autouse=True)
def _isolate_confscan_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host `CONFSCAN_*` variables from leaking into settings resolution."""

    for key in (
        "CONFSCAN_MAX_NAME_LENGTH",
        "CONFSCAN_MAX_VALUE_LENGTH",
        "CONFSCAN_ENCODING",
        "CONFSCAN_ALLOW_UNKNOWN_OPTIONS",
    ):
        monkeypatch.delenv(key, raising=False)
