from __future__ import annotations

import pytest

from fetchkit import CoordinatorSettings


def test_defaults():
    settings = CoordinatorSettings()
    assert settings.gate_mode == "event"
    assert settings.gate_poll_interval_s == pytest.approx(0.1)
    assert settings.retain_data_on_error is True
    assert settings.cache_store is None


def test_from_env(monkeypatch):
    monkeypatch.setenv("FETCHKIT_GATE_MODE", " Poll ")
    monkeypatch.setenv("FETCHKIT_GATE_POLL_INTERVAL_S", "0.25")
    monkeypatch.setenv("FETCHKIT_RETAIN_DATA_ON_ERROR", "off")
    monkeypatch.setenv("FETCHKIT_CACHE_STORE", "shared")

    settings = CoordinatorSettings.from_env()
    assert settings.gate_mode == "poll"
    assert settings.gate_poll_interval_s == pytest.approx(0.25)
    assert settings.retain_data_on_error is False
    assert settings.cache_store == "shared"


def test_from_env_without_variables(monkeypatch):
    for name in (
        "FETCHKIT_GATE_MODE",
        "FETCHKIT_GATE_POLL_INTERVAL_S",
        "FETCHKIT_RETAIN_DATA_ON_ERROR",
        "FETCHKIT_CACHE_STORE",
    ):
        monkeypatch.delenv(name, raising=False)
    assert CoordinatorSettings.from_env() == CoordinatorSettings()


def test_invalid_values_are_rejected(monkeypatch):
    with pytest.raises(ValueError):
        CoordinatorSettings(gate_mode="busy")  # type: ignore[arg-type]
    with pytest.raises(ValueError):
        CoordinatorSettings(gate_poll_interval_s=0)

    monkeypatch.setenv("FETCHKIT_RETAIN_DATA_ON_ERROR", "maybe")
    with pytest.raises(ValueError):
        CoordinatorSettings.from_env()
