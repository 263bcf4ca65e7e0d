"""Ephemeris engine: body positions, Moon phase, magnitudes, and sizes.

One Ephemeris owns one EphemerisCache, so all queries for the same instant
and location share Earth's position, the frame, and the parallax geometry.
An Ephemeris must be used from a single thread.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from nearsky.bodies import (
    APPARENT_ONLY_STEPS,
    BodyId,
    BodySpec,
    ModelKind,
    TransformStep,
    get_body_spec,
)
from nearsky.cache import CacheEntry, EphemerisCache
from nearsky.config import get_geocentric_default
from nearsky.constants import LIGHT_MILLENNIA_PER_AU
from nearsky.coords import (
    EclipticCoordinates,
    EquatorialCoordinates,
    EquatorialFrame,
    normalize_angle,
)
from nearsky.frames import transforms
from nearsky.frames.observer import ObserverLocation
from nearsky.photometry import angular_size_arcsec, planet_magnitude, saturn_ring_sin_b
from nearsky.theory import moon, pluto
from nearsky.theory.vsop import VSOP_BODY_NAMES, get_model
from nearsky.time_utils import Instant

logger = logging.getLogger(__name__)

# Heliocentric orbit-view indices: the VSOP planets in solar order, then Pluto.
ORBIT_VIEW_BODIES = VSOP_BODY_NAMES + ('pluto',)


@dataclass(frozen=True)
class BodyPosition:
    """Query result, in the order (ra, dec, distance, sun_distance).

    Attributes:
        ra: Right ascension in radians, [0, 2*pi).
        dec: Declination in radians.
        distance: Distance from the observer (AU).
        sun_distance: Distance from the Sun (AU); 0 for the Sun and Moon.
        frame: APPARENT or J2000.
    """

    ra: float
    dec: float
    distance: float
    sun_distance: float
    frame: EquatorialFrame

    def equatorial(self) -> EquatorialCoordinates:
        return EquatorialCoordinates(self.ra, self.dec, self.frame)


@dataclass(frozen=True)
class MoonPhase:
    """Illuminated fraction (0-1), bright-limb position angle (radians), waxing flag."""

    illuminated_fraction: float
    position_angle: float
    waxing: bool


@dataclass
class _Working:
    """Coordinates flowing through one body's correction pipeline."""

    lam: float = 0.0
    beta: float = 0.0
    ra: float = 0.0
    dec: float = 0.0
    distance: float = 0.0
    sun_distance: float = 0.0


class Ephemeris:
    """Positions of the Sun, Moon, planets, and Pluto for an instant and location.

    Parameters:
        geocentric: Skip diurnal parallax; None defers to NEARSKY_GEOCENTRIC.
    """

    def __init__(self, geocentric: bool | None = None) -> None:
        self.geocentric = get_geocentric_default() if geocentric is None else geocentric
        self.cache = EphemerisCache()

    def _entry(self, instant: Instant, location: ObserverLocation | None) -> CacheEntry:
        if self.geocentric:
            location = None
        elif location is None:
            raise ValueError('An observer location is required unless running geocentric')
        return self.cache.ensure_current(instant, location)

    # Raw coordinates per model kind

    def _planet(self, spec: BodySpec, entry: CacheEntry, w: _Working) -> None:
        model = get_model(spec.series_name or '')
        t = entry.millennia
        helio = model.heliocentric(t)
        geo = helio.to_vector() - entry.earth_vector
        # Second evaluation at the light-time corrected epoch.
        t -= geo.magnitude() * LIGHT_MILLENNIA_PER_AU
        helio = model.heliocentric(t)
        geo = helio.to_vector() - entry.earth_vector
        w.distance = geo.magnitude()
        w.sun_distance = helio.radius
        w.lam = math.atan2(geo.y, geo.x)
        w.beta = math.atan(geo.z / math.hypot(geo.x, geo.y))

    def _pluto(self, entry: CacheEntry, w: _Working) -> None:
        result = pluto.geocentric(entry.instant.jde, self.cache.sun_j2000_vector())
        w.ra, w.dec = result.ra, result.dec
        w.distance = result.distance
        w.sun_distance = result.sun_distance

    def _sun(self, entry: CacheEntry, w: _Working) -> None:
        w.distance = entry.earth.radius
        w.lam = entry.earth.longitude + math.pi
        w.beta = -entry.earth.latitude

    def _moon(self, entry: CacheEntry, w: _Working) -> None:
        coords = moon.coordinates(entry.instant.jde)
        w.lam, w.beta, w.distance = coords.longitude, coords.latitude, coords.radius

    def _apply(
        self, step: TransformStep, entry: CacheEntry, w: _Working, apparent: bool
    ) -> None:
        frame = entry.frame
        if step in APPARENT_ONLY_STEPS and not apparent:
            return
        if step is TransformStep.ECLIPTIC_ABERRATION:
            w.lam, w.beta = transforms.ecliptic_aberration(frame.aberration, w.lam, w.beta)
        elif step is TransformStep.FK5:
            w.lam, w.beta = transforms.fk5_correction(entry.instant.jde, w.lam, w.beta)
        elif step is TransformStep.ECLIPTIC_TO_EQUATORIAL:
            w.ra, w.dec = transforms.ecliptic_to_equatorial(frame.nutation, w.lam, w.beta)
        elif step is TransformStep.PRECESS_NUTATE:
            w.ra, w.dec = transforms.precess_nutate(frame, w.ra, w.dec)
        elif step is TransformStep.EQUATORIAL_ABERRATION:
            w.ra, w.dec = transforms.equatorial_aberration(frame, w.ra, w.dec)
        elif step is TransformStep.PARALLAX:
            if entry.observer is not None:
                w.ra, w.dec, w.distance = transforms.diurnal_parallax(
                    entry.observer, w.ra, w.dec, w.distance
                )
        elif step is TransformStep.TO_J2000:
            if not apparent:
                w.ra, w.dec = transforms.unprecess_nutate(frame, w.ra, w.dec)

    def position(
        self,
        body: int,
        instant: Instant,
        location: ObserverLocation | None = None,
        apparent: bool = True,
    ) -> BodyPosition:
        """Compute a body's direction and distances.

        Parameters:
            body: BodyId or its integer value (0-9).
            instant: Query instant.
            location: Observer location (ignored in geocentric mode).
            apparent: Apparent coordinates of date if True, else astrometric J2000.

        Returns:
            BodyPosition; all zeros when the body identifier is out of range.

        Raises:
            ValueError: If no location is given outside geocentric mode.
        """
        frame_tag = EquatorialFrame.APPARENT if apparent else EquatorialFrame.J2000
        spec = get_body_spec(body)
        if spec is None:
            return BodyPosition(0.0, 0.0, 0.0, 0.0, frame_tag)
        entry = self._entry(instant, location)
        w = _Working()
        if spec.kind is ModelKind.PLANET:
            self._planet(spec, entry, w)
        elif spec.kind is ModelKind.PLUTO:
            self._pluto(entry, w)
        elif spec.kind is ModelKind.SUN:
            self._sun(entry, w)
        else:
            self._moon(entry, w)
        for step in spec.steps:
            self._apply(step, entry, w, apparent)
        return BodyPosition(normalize_angle(w.ra), w.dec, w.distance, w.sun_distance, frame_tag)

    def heliocentric(self, index: int, t: float) -> EclipticCoordinates:
        """Heliocentric ecliptic coordinates for orbit views.

        Parameters:
            index: 0-8 for Mercury, Venus, Earth, Mars, ..., Neptune, Pluto.
            t: Julian millennia from J2000.0.

        Returns:
            EclipticCoordinates; zeros when the index is out of range.
        """
        if not 0 <= index < len(ORBIT_VIEW_BODIES):
            logger.warning('Orbit-view body index %r out of range 0-8', index)
            return EclipticCoordinates(0.0, 0.0, 0.0)
        name = ORBIT_VIEW_BODIES[index]
        if name == 'pluto':
            return pluto.heliocentric_for_orbit_view(t)
        return get_model(name).heliocentric(t)

    def sun_equatorial(
        self,
        instant: Instant,
        location: ObserverLocation | None = None,
        apparent: bool = True,
    ) -> EquatorialCoordinates:
        """Sun direction kept in the cache (nutated, or J2000), for phase geometry."""
        entry = self._entry(instant, location)
        return entry.sun_apparent if apparent else entry.sun_j2000

    def moon_phase(
        self,
        instant: Instant,
        location: ObserverLocation | None = None,
        apparent: bool = True,
    ) -> MoonPhase:
        """Illuminated fraction, bright-limb position angle, and waxing state of the Moon."""
        m = self.position(BodyId.MOON, instant, location, apparent)
        s = self.sun_equatorial(instant, location, apparent)
        return MoonPhase(
            illuminated_fraction=moon.illuminated_fraction(m.ra, m.dec, s.ra, s.dec),
            position_angle=moon.bright_limb_position_angle(m.ra, m.dec, s.ra, s.dec),
            waxing=moon.is_waxing(m.ra, s.ra),
        )

    def magnitude(
        self,
        body: int,
        instant: Instant,
        location: ObserverLocation | None = None,
    ) -> float | None:
        """Apparent visual magnitude; None for the Sun, Moon, or an invalid body."""
        spec = get_body_spec(body)
        if spec is None or not spec.phase_law:
            return None
        pos = self.position(spec.body_id, instant, location, apparent=True)
        entry = self._entry(instant, location)
        ring_sin_b = 0.0
        if spec.has_rings:
            lam, beta = transforms.equatorial_to_ecliptic(entry.frame.nutation, pos.ra, pos.dec)
            ring_sin_b = saturn_ring_sin_b(instant.jde, lam, beta)
        return planet_magnitude(
            spec, pos.sun_distance, pos.distance, entry.earth.radius, ring_sin_b
        )

    def angular_size(
        self,
        body: int,
        instant: Instant,
        location: ObserverLocation | None = None,
    ) -> float:
        """Apparent diameter in arcseconds; 0 for an invalid body."""
        spec = get_body_spec(body)
        if spec is None:
            return 0.0
        pos = self.position(spec.body_id, instant, location, apparent=True)
        return angular_size_arcsec(spec, pos.distance)

    @staticmethod
    def separation(ra1: float, dec1: float, ra2: float, dec2: float) -> float:
        """Angular separation of two directions in radians."""
        return transforms.angular_separation(ra1, dec1, ra2, dec2)
