"""Tests for the delta-T model."""

from __future__ import annotations

import pytest

from nearsky.delta_t import delta_t


def _jd(year: float) -> float:
    return 2451545.0 + (year - 2000.0) * 365.25


def test_delta_t_at_j2000() -> None:
    """Tabulated value for 2000.0."""
    assert delta_t(2451545.0) == pytest.approx(63.83, abs=1e-9)


def test_delta_t_at_table_end() -> None:
    """At the last tabulated year the blend reproduces the table value."""
    assert delta_t(_jd(2014.0)) == pytest.approx(70.0, abs=1e-6)


def test_delta_t_continuous_at_table_start() -> None:
    """The medieval blend meets the table at its first year."""
    before = delta_t(_jd(1619.9999))
    after = delta_t(_jd(1620.0))
    assert before == pytest.approx(after, abs=0.05)


def test_delta_t_future_follows_quadratic_after_2100() -> None:
    """Beyond 2100 only the quadratic remains."""
    u = 5.0
    assert delta_t(_jd(2500.0)) == pytest.approx(102.0 + 102.0 * u + 25.3 * u * u)


def test_delta_t_ancient_formula() -> None:
    """Before 948 the long-term parabola applies."""
    u = -15.0
    assert delta_t(_jd(500.0)) == pytest.approx(2178.45936 + 497.0 * u + 44.1 * u * u)


def test_delta_t_increases_into_the_past() -> None:
    """Delta-T grows to hours a few millennia back."""
    assert delta_t(_jd(-1000.0)) > delta_t(_jd(1000.0)) > delta_t(_jd(1700.0))
