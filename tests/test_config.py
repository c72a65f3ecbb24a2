from __future__ import annotations

import pytest

from landing_analyzer.config import AnalyzerSettings
from landing_analyzer.core.clients.markup import DEFAULT_TIMEOUT_SECONDS, DEFAULT_USER_AGENT
from landing_analyzer.core.scoring import ALTERNATE_RUBRIC, CANONICAL_RUBRIC


def test_defaults():
    settings = AnalyzerSettings.from_env({})
    assert settings.fetch_timeout == DEFAULT_TIMEOUT_SECONDS
    assert settings.user_agent == DEFAULT_USER_AGENT
    assert settings.locale == "fa"
    assert settings.rubric == CANONICAL_RUBRIC
    assert settings.simulation_seed is None


def test_overrides():
    settings = AnalyzerSettings.from_env({
        "LANDING_FETCH_TIMEOUT": "7.5",
        "LANDING_USER_AGENT": "probe/3.0",
        "LANDING_LOCALE": "en",
        "LANDING_RUBRIC": "alternate",
        "LANDING_SIMULATION_SEED": "42",
    })
    assert settings.fetch_timeout == 7.5
    assert settings.user_agent == "probe/3.0"
    assert settings.locale == "en"
    assert settings.rubric == ALTERNATE_RUBRIC
    assert settings.simulation_seed == 42


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("LANDING_LOCALE", "en")
    assert AnalyzerSettings.from_env().locale == "en"


@pytest.mark.parametrize("env,message", [
    ({"LANDING_FETCH_TIMEOUT": "soon"}, "LANDING_FETCH_TIMEOUT"),
    ({"LANDING_SIMULATION_SEED": "abc"}, "LANDING_SIMULATION_SEED"),
    ({"LANDING_LOCALE": "de"}, "Unsupported locale"),
    ({"LANDING_RUBRIC": "strict"}, "Unknown rubric"),
])
def test_invalid_values(env, message):
    with pytest.raises(ValueError, match=message):
        AnalyzerSettings.from_env(env)


def test_timeout_must_be_positive():
    with pytest.raises(ValueError):
        AnalyzerSettings.from_env({"LANDING_FETCH_TIMEOUT": "0"})
