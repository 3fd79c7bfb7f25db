from __future__ import annotations

import math

import pytest
from pydantic import ValidationError

from cdlkit.api.settings import Settings


def test_defaults():
    s = Settings()
    assert s.period == 10
    assert s.body_doji_factor == 0.1
    assert s.shadow_very_short_factor == 0.05
    assert s.equal_factor == 0.25
    assert s.star_penetration_factor == 0.3
    assert s.piercing_penetration_factor == 0.5


def test_settings_are_immutable():
    s = Settings()
    with pytest.raises(ValidationError):
        s.period = 20


def test_override_with_model_copy():
    s = Settings().model_copy(update={"period": 14})
    assert s.period == 14
    assert s.near_factor == Settings().near_factor


@pytest.mark.parametrize("bad", [math.inf, -math.inf, math.nan])
def test_non_finite_factor_rejected(bad):
    with pytest.raises(ValidationError):
        Settings(near_factor=bad)


def test_unknown_field_rejected():
    with pytest.raises(ValidationError):
        Settings(body_factor=1.0)


def test_from_env(monkeypatch):
    monkeypatch.setenv("CDL_PERIOD", "14")
    monkeypatch.setenv("CDL_STAR_PENETRATION_FACTOR", "0.4")
    s = Settings.from_env()
    assert type(s) is Settings
    assert s.period == 14
    assert s.star_penetration_factor == 0.4
    assert s.far_factor == 0.6
