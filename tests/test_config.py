"""Tests for projection settings loaded from the environment."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from drivable_corridor.config import ProjectionSettings, default_settings, load_settings

_VARIABLES = (
    "CORRIDOR_SAMPLES_PER_SEGMENT",
    "CORRIDOR_MAX_NEWTON_ITERATIONS",
    "CORRIDOR_TOLERANCE",
    "CORRIDOR_HINT_WINDOW",
)


@pytest.fixture
def clean_env(monkeypatch):
    for name in _VARIABLES:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_defaults():
    settings = ProjectionSettings()
    assert settings.samples_per_segment == 8
    assert settings.max_newton_iterations == 20
    assert settings.tolerance == pytest.approx(1e-9)
    assert settings.hint_window == pytest.approx(10.0)


def test_load_without_overrides(clean_env):
    assert load_settings() == ProjectionSettings()


def test_environment_overrides(clean_env):
    clean_env.setenv("CORRIDOR_SAMPLES_PER_SEGMENT", "16")
    clean_env.setenv("CORRIDOR_HINT_WINDOW", "2.5")
    settings = load_settings()
    assert settings.samples_per_segment == 16
    assert settings.hint_window == pytest.approx(2.5)
    assert settings.max_newton_iterations == 20


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("CORRIDOR_SAMPLES_PER_SEGMENT", "0"),
        ("CORRIDOR_TOLERANCE", "-1"),
        ("CORRIDOR_HINT_WINDOW", "wide"),
    ],
)
def test_invalid_values_raise(clean_env, name, value):
    clean_env.setenv(name, value)
    with pytest.raises(ValidationError):
        load_settings()


def test_direct_validation():
    with pytest.raises(ValidationError):
        ProjectionSettings(max_newton_iterations=0)


def test_default_settings_is_cached():
    assert default_settings() is default_settings()
