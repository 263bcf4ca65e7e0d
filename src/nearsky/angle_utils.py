"""Angle parsing and sexagesimal formatting for RA, Dec, and observer coordinates."""

from __future__ import annotations

import math
import re

from nearsky.constants import RAD2DEG

_COMPASS_SIGN = {'N': 1.0, 'E': 1.0, 'S': -1.0, 'W': -1.0}


def parse_angle(string: str) -> float | None:
    """Parse an angle given as decimal or sexagesimal degrees (or hours).

    Accepts one to three numbers separated by whitespace or colons
    ("40.5", "40 30", "40:30:15"). A leading minus sign or a trailing compass
    letter (N/E positive, S/W negative) sets the sign. Minutes and seconds
    must lie in [0, 60).

    Parameters:
        string: Angle text.

    Returns:
        Angle in the units of the first number, or None on parse failure.
    """
    s = string.strip()
    if not s:
        return None
    sign = 1.0
    if s[-1].upper() in _COMPASS_SIGN:
        sign = _COMPASS_SIGN[s[-1].upper()]
        s = s[:-1].strip()
    if s.startswith('-'):
        sign = -sign
        s = s[1:].strip()
    elif s.startswith('+'):
        s = s[1:].strip()
    parts = [p for p in re.split(r'[\s:]+', s) if p]
    if not 1 <= len(parts) <= 3:
        return None
    try:
        values = [float(p) for p in parts]
    except ValueError:
        return None
    if any(v < 0 or v >= 60 for v in values[1:]) or values[0] < 0:
        return None
    angle = 0.0
    for scale, v in zip((1.0, 60.0, 3600.0), values):
        angle += v / scale
    return sign * angle


def _split_sexagesimal(value: float, ndecimal: int) -> tuple[int, int, float]:
    """Split |value| into whole units, minutes, and rounded seconds with carry."""
    ntens = 10**ndecimal
    ticks = round(abs(value) * 3600.0 * ntens)
    whole, rem = divmod(ticks, 3600 * ntens)
    minutes, sec_ticks = divmod(rem, 60 * ntens)
    return int(whole), int(minutes), sec_ticks / ntens


def format_hms(ra: float, ndecimal: int = 1) -> str:
    """Format a right ascension in radians as 'HHh MMm SS.Ss', wrapped into [0, 24h)."""
    hours = math.fmod(ra * RAD2DEG / 15.0, 24.0)
    if hours < 0:
        hours += 24.0
    h, m, s = _split_sexagesimal(hours, ndecimal)
    h %= 24
    width = 3 + ndecimal if ndecimal else 2
    return f'{h:02d}h {m:02d}m {s:0{width}.{ndecimal}f}s'


def format_dms(angle: float, ndecimal: int = 0) -> str:
    """Format an angle in radians as '+DD° MM′ SS″' (sign always shown)."""
    degrees = angle * RAD2DEG
    d, m, s = _split_sexagesimal(degrees, ndecimal)
    sign = '-' if degrees < 0 and (d or m or s) else '+'
    width = 3 + ndecimal if ndecimal else 2
    return f'{sign}{d:02d}° {m:02d}′ {s:0{width}.{ndecimal}f}″'
