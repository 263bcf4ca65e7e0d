"""Tests for angle parsing and formatting."""

from __future__ import annotations

import math

import pytest

from nearsky.angle_utils import format_dms, format_hms, parse_angle


@pytest.mark.parametrize(
    ('text', 'expected'),
    [
        ('40.5', 40.5),
        ('40 30', 40.5),
        ('40:30:36', 40.51),
        ('-33 21 22', -(33 + 21 / 60 + 22 / 3600)),
        ('118 W', -118.0),
        ('34:03N', 34.05),
        ('+12', 12.0),
    ],
)
def test_parse_angle(text: str, expected: float) -> None:
    """Decimal and sexagesimal forms with sign or compass suffix."""
    assert parse_angle(text) == pytest.approx(expected)


@pytest.mark.parametrize('text', ['', 'abc', '40 60', '1 2 3 4', '12:-5'])
def test_parse_angle_rejects(text: str) -> None:
    """Bad numbers, out-of-range minutes, or too many fields give None."""
    assert parse_angle(text) is None


def test_format_hms_rounds_with_carry() -> None:
    """Seconds rounding to 60 carry into minutes and hours wrap at 24."""
    assert format_hms(math.radians(15 * (16 + 33 / 60 + 59.3 / 3600))) == '16h 33m 59.3s'
    assert format_hms(math.radians(15 * (23 + 59 / 60 + 59.99 / 3600))) == '00h 00m 00.0s'


def test_format_dms_signs() -> None:
    """Sign is always shown, and rounding to zero is positive."""
    assert format_dms(-math.radians(20 + 53 / 60 + 32 / 3600)) == '-20° 53′ 32″'
    assert format_dms(math.radians(24 + 35 / 60 + 35.2 / 3600)) == '+24° 35′ 35″'
    assert format_dms(-1e-9) == '+00° 00′ 00″'
