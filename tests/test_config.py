"""Environment-driven configuration tests."""

import pytest

from stats_mock.config import MockConfig


def test_defaults_match_documented_timings():
    config = MockConfig.from_env({})
    assert config.port == 3000
    assert config.quiet_period_ms == 1000
    assert (config.jitter_min_ms, config.jitter_max_ms) == (1000, 3000)
    assert config.seed is None
    assert config.debug is False


def test_reads_mock_variables():
    config = MockConfig.from_env(
        {
            "MOCK_HOST": "127.0.0.1",
            "MOCK_PORT": "9000",
            "MOCK_LOG_LEVEL": "DEBUG",
            "MOCK_QUIET_PERIOD_MS": "250",
            "MOCK_JITTER_MIN_MS": "100",
            "MOCK_JITTER_MAX_MS": "200",
            "MOCK_SEED": "3",
            "MOCK_DEBUG": "yes",
        }
    )
    assert config.host == "127.0.0.1"
    assert config.port == 9000
    assert config.log_level == "debug"
    assert config.quiet_period_ms == 250
    assert config.seed == 3
    assert config.debug is True


def test_malformed_integer_names_the_variable():
    with pytest.raises(ValueError, match="MOCK_QUIET_PERIOD_MS"):
        MockConfig.from_env({"MOCK_QUIET_PERIOD_MS": "soon"})


def test_build_coordinator_converts_to_seconds():
    coordinator = MockConfig(quiet_period_ms=250, jitter_min_ms=100, jitter_max_ms=200).build_coordinator()
    assert coordinator.quiet_period == pytest.approx(0.25)
    assert coordinator.min_delay == pytest.approx(0.1)
    assert coordinator.max_delay == pytest.approx(0.2)


def test_inverted_jitter_range_rejected_when_building():
    with pytest.raises(ValueError):
        MockConfig(jitter_min_ms=500, jitter_max_ms=100).build_coordinator()
