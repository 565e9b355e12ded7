from __future__ import annotations

import dataclasses

import pytest

from clover.config import DEFAULT_TARGET_WIDTH, UsageSettings


def test_defaults() -> None:
    settings = UsageSettings()
    assert settings.target_width == DEFAULT_TARGET_WIDTH == 100
    assert settings.program_name is None


def test_fields_are_fixed() -> None:
    assert [f.name for f in dataclasses.fields(UsageSettings)] == ["target_width", "program_name"]
    settings = UsageSettings(target_width=72, program_name="tool")
    with pytest.raises(AttributeError):
        settings.colour = True  # type: ignore[attr-defined]


def test_settings_ignore_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CLOVER_USAGE_WIDTH", "20")
    monkeypatch.setenv("COLUMNS", "20")
    assert UsageSettings() == UsageSettings(target_width=100)
