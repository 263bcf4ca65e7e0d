"""Time service: calendar parsing via rms-julian, delta-T, and the Instant value."""

from __future__ import annotations

import logging
from dataclasses import dataclass

import julian

from nearsky.config import get_ignore_delta_t, get_leapsecs_path
from nearsky.constants import (
    DAYS_PER_CENTURY,
    DAYS_PER_MILLENNIUM,
    J2000,
    JD_OF_DAY_ZERO,
    SECONDS_PER_DAY,
)
from nearsky.delta_t import delta_t

logger = logging.getLogger(__name__)

# Leap seconds loaded once at first use.
_leapsecs_loaded = False


def _ensure_leapsecs() -> None:
    """Load leap seconds into rms-julian if not already loaded.

    Uses NEARSKY_LEAPSECS when set and readable, else rms-julian's bundled LSK.
    """
    global _leapsecs_loaded
    if _leapsecs_loaded:
        return
    julian.set_ut_model('SPICE')
    path = get_leapsecs_path()
    if path is not None:
        try:
            julian.load_lsk(path)
            _leapsecs_loaded = True
            return
        except (OSError, KeyError, ValueError) as e:
            logger.info('Leap seconds from %s not used (%s); using rms-julian bundled LSK.', path, e)
    julian.load_lsk()
    _leapsecs_loaded = True


@dataclass(frozen=True)
class Instant:
    """A Julian Ephemeris Day together with the delta-T used to derive it.

    Attributes:
        jde: Julian Ephemeris Day (TT).
        delta_t: TT - UT in seconds.
    """

    jde: float
    delta_t: float = 0.0

    @property
    def jd_ut(self) -> float:
        """Julian day on the UT scale."""
        return self.jde - self.delta_t / SECONDS_PER_DAY

    @property
    def centuries(self) -> float:
        """Julian centuries from J2000.0."""
        return (self.jde - J2000) / DAYS_PER_CENTURY

    @property
    def millennia(self) -> float:
        """Julian millennia from J2000.0."""
        return (self.jde - J2000) / DAYS_PER_MILLENNIUM


def instant_from_jde(jde: float, delta_t_seconds: float = 0.0) -> Instant:
    """Build an Instant directly from a Julian Ephemeris Day."""
    return Instant(float(jde), float(delta_t_seconds))


def instant_from_jd(jd_ut: float, ignore_delta_t: bool | None = None) -> Instant:
    """Build an Instant from a UT Julian day using the delta-T model.

    Parameters:
        jd_ut: Julian day (UT).
        ignore_delta_t: Treat delta-T as zero; None defers to NEARSKY_IGNORE_DELTA_T.

    Returns:
        Instant with jde = jd_ut + delta_t/86400.
    """
    if ignore_delta_t is None:
        ignore_delta_t = get_ignore_delta_t()
    dt = 0.0 if ignore_delta_t else delta_t(jd_ut)
    return Instant(jd_ut + dt / SECONDS_PER_DAY, dt)


def parse_datetime(string: str) -> tuple[int, float] | None:
    """Parse a date/time string to UTC (day, sec).

    Parameters:
        string: Date/time string (any format accepted by rms-julian); a
            trailing ISO 'Z' is allowed.

    Returns:
        (day, sec) where day counts days from 2000-01-01 and sec is seconds
        into that day; None on parse failure.
    """
    _ensure_leapsecs()
    candidates = [string]
    stripped = string.strip()
    if stripped.endswith(('Z', 'z')):
        candidates.append(stripped[:-1])
    for candidate in candidates:
        try:
            result = julian.day_sec_from_string(candidate)
            day, sec = result[0], result[1]
            return (int(day), float(sec))
        except (ValueError, TypeError, LookupError, OSError):
            continue
    return None


def jd_from_day_sec(day: int, sec: float) -> float:
    """UT Julian day for an rms-julian (day, sec) pair."""
    return JD_OF_DAY_ZERO + day + sec / SECONDS_PER_DAY


def jd_from_string(string: str) -> float:
    """UT Julian day for a calendar date/time string.

    Raises:
        ValueError: If the string cannot be parsed.
    """
    parsed = parse_datetime(string)
    if parsed is None:
        raise ValueError(f'Invalid date/time: {string!r}')
    return jd_from_day_sec(*parsed)
