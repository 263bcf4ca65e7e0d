"""Tests for vectors and coordinate helpers."""

from __future__ import annotations

import math

import pytest

from nearsky.coords import normalize_angle, ra_dec_from_vector, unit_vector
from nearsky.vectors import UNIT_Z, ZERO, Vector3


def test_vector_arithmetic() -> None:
    """Operators, dot, and cross behave as in R^3."""
    a = Vector3(1.0, 2.0, 3.0)
    b = Vector3(-2.0, 0.5, 1.0)
    assert a + b == Vector3(-1.0, 2.5, 4.0)
    assert 2.0 * a == a * 2.0 == Vector3(2.0, 4.0, 6.0)
    assert a.dot(b) == pytest.approx(2.0)
    assert Vector3(1.0, 0.0, 0.0).cross(Vector3(0.0, 1.0, 0.0)) == UNIT_Z


def test_angle_of_zero_vector() -> None:
    """The angle to a zero vector is defined as zero."""
    assert ZERO.angle(UNIT_Z) == 0.0
    assert UNIT_Z.angle(Vector3(1.0, 0.0, 0.0)) == pytest.approx(math.pi / 2)


@pytest.mark.parametrize('angle', [-1e-18, -0.5, 0.0, 7.0, -13.0, 2 * math.pi])
def test_normalize_angle(angle: float) -> None:
    """Results always lie in [0, 2*pi)."""
    result = normalize_angle(angle)
    assert 0.0 <= result < 2 * math.pi


def test_ra_dec_from_vector() -> None:
    """Directions round-trip; zero vector and poles are handled."""
    ra, dec = ra_dec_from_vector(unit_vector(5.0, -0.3) * 3.0)
    assert ra == pytest.approx(5.0)
    assert dec == pytest.approx(-0.3)
    assert ra_dec_from_vector(ZERO) == (0.0, 0.0)
    assert ra_dec_from_vector(UNIT_Z) == (0.0, pytest.approx(math.pi / 2))
