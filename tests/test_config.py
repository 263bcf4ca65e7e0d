"""Tests for environment-driven configuration."""

from __future__ import annotations

import pytest

from nearsky import config


@pytest.mark.parametrize('value', ['1', 'true', 'YES', ' on '])
def test_geocentric_flag_truthy(monkeypatch: pytest.MonkeyPatch, value: str) -> None:
    """Usual truthy spellings enable geocentric mode."""
    monkeypatch.setenv('NEARSKY_GEOCENTRIC', value)
    assert config.get_geocentric_default() is True


def test_flags_default_off(monkeypatch: pytest.MonkeyPatch) -> None:
    """Unset or falsy variables leave both flags off."""
    monkeypatch.delenv('NEARSKY_GEOCENTRIC', raising=False)
    monkeypatch.setenv('NEARSKY_IGNORE_DELTA_T', '0')
    assert config.get_geocentric_default() is False
    assert config.get_ignore_delta_t() is False


def test_leapsecs_path(monkeypatch: pytest.MonkeyPatch) -> None:
    """Blank path means use the bundled kernel."""
    monkeypatch.setenv('NEARSKY_LEAPSECS', '  ')
    assert config.get_leapsecs_path() is None
    monkeypatch.setenv('NEARSKY_LEAPSECS', '/data/naif0012.tls')
    assert config.get_leapsecs_path() == '/data/naif0012.tls'


def test_log_level_name(monkeypatch: pytest.MonkeyPatch) -> None:
    """Log level name is normalized to upper case."""
    monkeypatch.setenv('NEARSKY_LOG', 'debug')
    assert config.get_log_level_name() == 'DEBUG'
