"""Tests for periodic-series evaluation and heliocentric body models."""

from __future__ import annotations

import math

import numpy as np
import pytest

from nearsky.data import load_table
from nearsky.theory.series import evaluate_groups, evaluate_series, get_series_table
from nearsky.theory.vsop import VSOP_BODY_NAMES, get_model

# Meeus example 32.a: Venus, 1992 December 20 0h TD.
JDE_1992_DEC_20 = 2448976.5


def test_venus_heliocentric_matches_worked_example() -> None:
    """Venus L, B, R at JDE 2448976.5 match the published example."""
    t = (JDE_1992_DEC_20 - 2451545.0) / 365250.0
    coords = get_model('venus').heliocentric(t)
    assert math.degrees(coords.longitude) == pytest.approx(26.11428, abs=5e-4)
    assert math.degrees(coords.latitude) == pytest.approx(-2.62070, abs=5e-4)
    assert coords.radius == pytest.approx(0.724603, abs=2e-6)


@pytest.mark.parametrize('name', VSOP_BODY_NAMES)
def test_longitude_is_normalized(name: str) -> None:
    """Longitude lies in [0, 2*pi) across +-3000 years, including negative t."""
    table = get_series_table(name)
    for t in np.linspace(-3.0, 3.0, 61):
        lon = evaluate_series(table, float(t)).longitude
        assert 0.0 <= lon < 2.0 * math.pi


def test_groups_combine_with_increasing_powers() -> None:
    """Group k is multiplied by t**k (Horner accumulation from the top group)."""
    g0 = np.array([[2.0, 0.0, 0.0]])
    g1 = np.array([[3.0, 0.0, 0.0]])
    g2 = np.array([[5.0, 0.0, 0.0]])
    t = 0.5
    assert evaluate_groups((g0, g1, g2), t) == pytest.approx(2.0 + 3.0 * t + 5.0 * t * t)


def test_empty_group_contributes_nothing() -> None:
    """An empty group leaves the sum unchanged apart from the power shift."""
    g0 = np.array([[1.0, 0.0, 0.0]])
    empty = np.zeros((0, 3))
    assert evaluate_groups((g0, empty), 2.0) == pytest.approx(1.0)


def test_tables_are_read_only() -> None:
    """Coefficient arrays cannot be modified in place."""
    table = get_series_table('earth')
    with pytest.raises(ValueError):
        table.longitude[0][0, 0] = 0.0


def test_unknown_table_raises() -> None:
    """Asking for a body without a table raises KeyError."""
    with pytest.raises(KeyError):
        get_series_table('vulcan')


def test_model_registry_returns_same_instance() -> None:
    """Models are built once and reused."""
    assert get_model('mars') is get_model('mars')


@pytest.mark.parametrize('name', ['vsop87', 'pluto', 'moon', 'nutation', 'delta_t'])
def test_bundled_tables_load(name: str) -> None:
    """Every bundled coefficient table parses as JSON."""
    table = load_table(name)
    assert isinstance(table, dict)
    assert table


def test_every_vsop_group_is_numeric() -> None:
    """All series terms are numeric (A, B, C) triples."""
    raw = load_table('vsop87')
    for body in VSOP_BODY_NAMES + ('earth_j2000',):
        for key in ('L', 'B', 'R'):
            for group in raw[body][key]:
                for term in group:
                    assert len(term) == 3
                    assert all(isinstance(v, (int, float)) for v in term)
