"""Tests for the body registry and per-body correction order."""

from __future__ import annotations

import logging

import pytest

from nearsky.bodies import BODY_SPECS, BodyId, ModelKind, TransformStep, get_body_spec, parse_body


def test_every_body_has_a_spec() -> None:
    """Ten bodies, keyed by their identifiers."""
    assert sorted(BODY_SPECS) == list(BodyId)
    for body_id, spec in BODY_SPECS.items():
        assert spec.body_id is body_id


def test_sun_applies_fk5_before_aberration() -> None:
    """The Sun's order differs from the planets': FK5 first, then aberration."""
    sun = get_body_spec(BodyId.SUN)
    venus = get_body_spec(BodyId.VENUS)
    assert sun is not None and venus is not None
    assert sun.steps[:2] == (TransformStep.FK5, TransformStep.ECLIPTIC_ABERRATION)
    assert venus.steps[:2] == (TransformStep.ECLIPTIC_ABERRATION, TransformStep.FK5)


def test_moon_has_no_fk5_or_aberration() -> None:
    """The Moon only converts frames and applies parallax."""
    spec = get_body_spec(BodyId.MOON)
    assert spec is not None
    assert TransformStep.FK5 not in spec.steps
    assert TransformStep.ECLIPTIC_ABERRATION not in spec.steps
    assert spec.phase_law == ()


def test_pluto_starts_from_j2000_equatorial() -> None:
    """Pluto is precessed and nutated, then aberrated in equatorial form."""
    spec = get_body_spec(BodyId.PLUTO)
    assert spec is not None
    assert spec.kind is ModelKind.PLUTO
    assert spec.steps[0] is TransformStep.PRECESS_NUTATE


def test_only_saturn_has_rings() -> None:
    """The ring brightness term is Saturn's alone."""
    assert [s.name for s in BODY_SPECS.values() if s.has_rings] == ['Saturn']


def test_out_of_range_identifier_logs_and_returns_none(caplog: pytest.LogCaptureFixture) -> None:
    """Identifiers outside 0-9 are reported, not raised."""
    with caplog.at_level(logging.WARNING, logger='nearsky.bodies'):
        assert get_body_spec(10) is None
        assert get_body_spec(-1) is None
    assert 'out of range' in caplog.text


@pytest.mark.parametrize(
    ('token', 'expected'),
    [('mars', BodyId.MARS), ('SUN', BodyId.SUN), ('9', BodyId.MOON), (' pluto ', BodyId.PLUTO)],
)
def test_parse_body(token: str, expected: BodyId) -> None:
    """Names are case-insensitive; digits are identifiers."""
    assert parse_body(token) is expected


@pytest.mark.parametrize('token', ['earth', '10', '-1', 'vulcan'])
def test_parse_body_rejects(token: str) -> None:
    """Earth is the observer, not a queryable body."""
    with pytest.raises(ValueError):
        parse_body(token)
