"""Tests for the ephemeris engine against published positions."""

from __future__ import annotations

import math

import pytest

from nearsky.bodies import BodyId
from nearsky.constants import AU_KM
from nearsky.coords import EquatorialFrame
from nearsky.ephemeris import Ephemeris
from nearsky.frames.observer import ObserverLocation
from nearsky.time_utils import instant_from_jde

# 1992 December 20 0h TD, geocentric, apparent coordinates of date.
JDE = 2448976.5
TOLERANCE_ARCSEC = 5.0


def _hms(h: int, m: int, s: float) -> float:
    return math.radians(15.0 * (h + m / 60.0 + s / 3600.0))


def _dms(sign: int, d: int, m: int, s: float) -> float:
    return sign * math.radians(d + m / 60.0 + s / 3600.0)


# Distance (AU), apparent (RA, Dec), astrometric J2000 (RA, Dec).
EXPECTED = {
    BodyId.MERCURY: (
        1.216,
        (_hms(16, 33, 59.3), _dms(-1, 20, 53, 32)),
        (_hms(16, 34, 24.4), _dms(-1, 20, 54, 25)),
    ),
    BodyId.VENUS: (
        0.911,
        (_hms(21, 4, 41.5), _dms(-1, 18, 53, 17)),
        (_hms(21, 5, 5.2), _dms(-1, 18, 51, 37)),
    ),
    BodyId.MARS: (
        0.648,
        (_hms(7, 48, 35.3), _dms(1, 24, 35, 35)),
        (_hms(7, 48, 58.2), _dms(1, 24, 34, 40)),
    ),
    BodyId.JUPITER: (
        5.599,
        (_hms(12, 47, 9.6), _dms(-1, 3, 41, 55)),
        (_hms(12, 47, 30.7), _dms(-1, 3, 44, 8)),
    ),
    BodyId.SATURN: (
        10.514,
        (_hms(21, 11, 41.8), _dms(-1, 17, 15, 41)),
        (_hms(21, 12, 5.2), _dms(-1, 17, 13, 58)),
    ),
    BodyId.URANUS: (
        20.500,
        (_hms(19, 13, 48.6), _dms(-1, 22, 46, 13)),
        (_hms(19, 14, 14.2), _dms(-1, 22, 45, 30)),
    ),
    BodyId.NEPTUNE: (
        31.113,
        (_hms(19, 17, 14.6), _dms(-1, 21, 34, 15)),
        (_hms(19, 17, 39.9), _dms(-1, 21, 33, 30)),
    ),
    BodyId.PLUTO: (
        30.502,
        (_hms(15, 41, 11.2), _dms(-1, 5, 5, 57)),
        (_hms(15, 41, 33.6), _dms(-1, 5, 7, 16)),
    ),
    BodyId.SUN: (
        0.984,
        (_hms(17, 52, 49.9), _dms(-1, 23, 25, 46)),
        (_hms(17, 53, 15.9), _dms(-1, 23, 25, 53)),
    ),
    BodyId.MOON: (
        378437.0 / AU_KM,
        (_hms(14, 23, 33.2), _dms(-1, 18, 0, 20)),
        (_hms(14, 23, 55.5), _dms(-1, 18, 2, 10)),
    ),
}


@pytest.fixture
def ephemeris() -> Ephemeris:
    return Ephemeris(geocentric=True)


def _assert_close(ra: float, dec: float, expected: tuple[float, float]) -> None:
    dra = math.remainder(ra - expected[0], 2 * math.pi) * math.cos(expected[1])
    assert abs(math.degrees(dra) * 3600.0) < TOLERANCE_ARCSEC
    assert abs(math.degrees(dec - expected[1]) * 3600.0) < TOLERANCE_ARCSEC


@pytest.mark.parametrize('body', list(EXPECTED))
def test_apparent_positions_match_reference(ephemeris: Ephemeris, body: BodyId) -> None:
    """Apparent RA/Dec agree with the reference values to a few arcseconds."""
    pos = ephemeris.position(body, instant_from_jde(JDE))
    _assert_close(pos.ra, pos.dec, EXPECTED[body][1])
    assert pos.frame is EquatorialFrame.APPARENT


@pytest.mark.parametrize('body', list(EXPECTED))
def test_j2000_positions_match_reference(ephemeris: Ephemeris, body: BodyId) -> None:
    """Astrometric J2000 RA/Dec agree with the reference values to a few arcseconds."""
    pos = ephemeris.position(body, instant_from_jde(JDE), apparent=False)
    _assert_close(pos.ra, pos.dec, EXPECTED[body][2])
    assert pos.frame is EquatorialFrame.J2000


@pytest.mark.parametrize('body', [b for b in EXPECTED if b is not BodyId.MOON])
def test_distances_match_reference(ephemeris: Ephemeris, body: BodyId) -> None:
    """Geocentric distances agree with the reference to the quoted 0.001 AU."""
    pos = ephemeris.position(body, instant_from_jde(JDE))
    assert pos.distance == pytest.approx(EXPECTED[body][0], abs=6e-4)


def test_moon_distance(ephemeris: Ephemeris) -> None:
    """Geocentric lunar distance is about 378437 km."""
    pos = ephemeris.position(BodyId.MOON, instant_from_jde(JDE))
    assert pos.distance * AU_KM == pytest.approx(378437.0, abs=5.0)
    assert pos.sun_distance == 0.0


def test_invalid_body_returns_zeros(ephemeris: Ephemeris) -> None:
    """Out-of-range identifiers give an all-zero result without touching the cache."""
    pos = ephemeris.position(10, instant_from_jde(JDE))
    assert (pos.ra, pos.dec, pos.distance, pos.sun_distance) == (0.0, 0.0, 0.0, 0.0)
    assert ephemeris.cache.recompute_count == 0
    assert ephemeris.magnitude(10, instant_from_jde(JDE)) is None
    assert ephemeris.angular_size(10, instant_from_jde(JDE)) == 0.0


def test_all_bodies_wrap_ra(ephemeris: Ephemeris) -> None:
    """Every body's RA is in [0, 2*pi), in both frames."""
    instant = instant_from_jde(JDE)
    for body in BodyId:
        for apparent in (True, False):
            pos = ephemeris.position(body, instant, apparent=apparent)
            assert 0.0 <= pos.ra < 2 * math.pi
            assert pos.distance > 0.0


def test_j2000_differs_from_apparent_by_precession(ephemeris: Ephemeris) -> None:
    """Seven years of precession plus nutation and aberration separate the frames."""
    instant = instant_from_jde(JDE)
    app = ephemeris.position(BodyId.VENUS, instant)
    j2000 = ephemeris.position(BodyId.VENUS, instant, apparent=False)
    assert j2000.frame is EquatorialFrame.J2000
    sep = math.degrees(Ephemeris.separation(app.ra, app.dec, j2000.ra, j2000.dec)) * 3600.0
    assert 100.0 < sep < 1000.0
    assert j2000.distance == app.distance


def test_location_required_unless_geocentric() -> None:
    """Topocentric mode without a location is an error."""
    eph = Ephemeris(geocentric=False)
    with pytest.raises(ValueError, match='location'):
        eph.position(BodyId.MOON, instant_from_jde(JDE))


def test_geocentric_mode_ignores_location(ephemeris: Ephemeris) -> None:
    """In geocentric mode a location changes nothing."""
    instant = instant_from_jde(JDE)
    here = ObserverLocation(-118.0, 34.0)
    assert ephemeris.position(BodyId.MOON, instant, here) == ephemeris.position(
        BodyId.MOON, instant
    )


def test_geocentric_default_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """NEARSKY_GEOCENTRIC sets the default mode."""
    monkeypatch.setenv('NEARSKY_GEOCENTRIC', 'yes')
    assert Ephemeris().geocentric is True


def test_parallax_moves_the_moon() -> None:
    """Topocentric and geocentric Moon differ by up to about a degree."""
    instant = instant_from_jde(JDE)
    geo = Ephemeris(geocentric=True).position(BodyId.MOON, instant)
    topo = Ephemeris(geocentric=False).position(
        BodyId.MOON, instant, ObserverLocation(-118.0, 34.0)
    )
    sep = math.degrees(Ephemeris.separation(geo.ra, geo.dec, topo.ra, topo.dec))
    assert 0.01 < sep < 1.1
    assert topo.distance != geo.distance


def test_moon_phase_waning_crescent(ephemeris: Ephemeris) -> None:
    """Four days before new moon the Moon is a waning crescent."""
    phase = ephemeris.moon_phase(instant_from_jde(JDE))
    assert 0.1 < phase.illuminated_fraction < 0.25
    assert not phase.waxing


def test_magnitudes(ephemeris: Ephemeris) -> None:
    """Planets get magnitudes; the Sun and Moon do not."""
    instant = instant_from_jde(JDE)
    venus = ephemeris.magnitude(BodyId.VENUS, instant)
    saturn = ephemeris.magnitude(BodyId.SATURN, instant)
    assert venus is not None and -5.0 < venus < -3.5
    assert saturn is not None and -0.5 < saturn < 2.0
    assert ephemeris.magnitude(BodyId.SUN, instant) is None
    assert ephemeris.magnitude(BodyId.MOON, instant) is None


def test_angular_sizes(ephemeris: Ephemeris) -> None:
    """The Sun near perihelion spans about 32.5 arcminutes."""
    instant = instant_from_jde(JDE)
    assert ephemeris.angular_size(BodyId.SUN, instant) == pytest.approx(1951.0, abs=3.0)
    assert 1880.0 < ephemeris.angular_size(BodyId.MOON, instant) < 1910.0


def test_heliocentric_orbit_view(ephemeris: Ephemeris) -> None:
    """Index 2 is Earth, 8 is Pluto, and anything else gives zeros."""
    earth = ephemeris.heliocentric(2, 0.0)
    assert earth.radius == pytest.approx(0.9833, abs=1e-3)
    assert 29.0 < ephemeris.heliocentric(8, 0.0).radius < 31.0
    bad = ephemeris.heliocentric(9, 0.0)
    assert (bad.longitude, bad.latitude, bad.radius) == (0.0, 0.0, 0.0)


def test_far_dates_stay_finite(ephemeris: Ephemeris) -> None:
    """Positions three millennia out degrade but remain finite."""
    for jde in (1355807.5, 3547272.5):
        for body in BodyId:
            pos = ephemeris.position(body, instant_from_jde(jde))
            assert math.isfinite(pos.ra) and math.isfinite(pos.dec)
