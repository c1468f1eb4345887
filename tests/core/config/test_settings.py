# tests/core/config/test_settings.py
"""
Testes dos settings efetivos do processo.

Invariantes:
    - Defaults: breakpoints ["failed"], timeout 3 s, logging INFO
    - `configure` sempre parte de DEFAULT_SETTINGS (não acumula)
    - Valores inválidos são rejeitados com ConfigError
    - `get_settings` devolve cópia (mutá-la não altera o processo)
"""

from pathlib import Path

import pytest

from atlas_taskflow.core.config import (
    DEFAULT_SETTINGS,
    breakpoints_for,
    configure,
    configure_from_files,
    default_timeout_seconds,
    get_settings,
    reset_settings,
)
from atlas_taskflow.core.config.errors import ConfigError


def test_defaults():
    settings = get_settings()
    assert settings == DEFAULT_SETTINGS
    assert breakpoints_for("task") == ["failed"]
    assert breakpoints_for("workflow") == ["failed"]
    assert default_timeout_seconds() == 3


def test_configure_merges_onto_defaults_without_accumulating():
    configure({"timeout": {"seconds": 1}})
    configure({"workflow": {"breakpoints": ["skipped"]}})

    assert default_timeout_seconds() == 3
    assert breakpoints_for("workflow") == ["skipped"]


def test_get_settings_returns_a_copy():
    get_settings()["task"]["breakpoints"].append("skipped")
    assert breakpoints_for("task") == ["failed"]


@pytest.mark.parametrize(
    "overrides",
    [
        {"timeout": {"seconds": 0}},
        {"timeout": {"seconds": -2}},
        {"timeout": {"seconds": None}},
        {"task": {"breakpoints": None}},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ConfigError):
        configure(overrides)
    assert get_settings() == DEFAULT_SETTINGS


def test_configure_from_files(tmp_path: Path, project_like_config_defaults_yaml, project_like_config_local_yaml):
    defaults = tmp_path / "taskflow.defaults.yaml"
    local = tmp_path / "taskflow.local.yaml"
    defaults.write_text(project_like_config_defaults_yaml, encoding="utf-8")
    local.write_text(project_like_config_local_yaml, encoding="utf-8")

    configure_from_files(defaults_path=str(defaults), local_path=str(local))
    assert default_timeout_seconds() == 0.5
    assert breakpoints_for("workflow") == ["failed", "skipped"]
    assert get_settings()["logging"]["level"] == "DEBUG"


def test_reset_settings():
    configure({"timeout": {"seconds": 9}})
    reset_settings()
    assert default_timeout_seconds() == 3
