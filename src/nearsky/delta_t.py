"""Delta-T (TT - UT) model.

Inside 1620-2014 a yearly table is interpolated with Bessel coefficients up
to fourth differences. Outside the table, quadratic formulas in centuries
from 2000 are used and blended into the table ends so the model is continuous.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nearsky.data import load_table

logger = logging.getLogger(__name__)

# Year before which the tabulated values are reduced for the adopted lunar
# acceleration of -25.7376 arcsec/cy^2 (instead of -26.0).
_TIDAL_CORRECTION_END = 1955
_TIDAL_CORRECTION = 23.8973  # centiseconds per century^2


@dataclass(frozen=True)
class _BesselTable:
    first_year: int
    last_year: int
    dt: tuple[int, ...]
    d1: tuple[float, ...]
    d2: tuple[float, ...]
    d3: tuple[float, ...]
    d4: tuple[float, ...]


def _build_table() -> _BesselTable:
    raw = load_table('delta_t')
    start = int(raw['first_year'])
    dt = [int(v) for v in raw['values']]
    for i in range(_TIDAL_CORRECTION_END - start + 1):
        u = (start + i - 1955.5) / 100.0
        dt[i] = int(dt[i] - _TIDAL_CORRECTION * u * u)

    n = len(dt)
    d1 = [0.0] * (n - 1)
    d2 = [0.0] * (n - 1)
    d3 = [0.0] * (n - 1)
    d4 = [0.0] * (n - 1)
    for i in range(n - 1):
        d1[i] = dt[i + 1] - dt[i]
    for i in range(n - 2):
        d2[i] = d1[i + 1] - d1[i]
    for i in range(n - 3):
        d3[i] = d2[i + 1] - d2[i]
    for i in range(n - 4):
        d4[i] = d3[i + 1] - d3[i]

    # Last interval: second differences only.
    d2[n - 2] = d3[n - 2] = d4[n - 2] = 0.0
    d2[n - 3] = (d2[n - 3] + d2[n - 4]) / 4.0
    d1[n - 3] -= d2[n - 3]
    d3[n - 3] = d4[n - 3] = 0.0
    # Interior: Bessel coefficients, walking down so i-1 and i-2 are still raw.
    for i in range(n - 4, 1, -1):
        d4[i] = d4[i - 1] + d4[i - 2]
        d3[i] = d3[i - 1]
        d2[i] = d2[i] + d2[i - 1]
        d1[i] = d1[i] - d2[i] / 4.0 + d3[i] / 12.0 + d4[i] / 24.0
        d2[i] = d2[i] / 4.0 - d3[i] / 4.0 - d4[i] / 48.0
        d3[i] = d3[i] / 6.0 - d4[i] / 24.0
        d4[i] = d4[i] / 48.0
    d2[1] = (d2[1] + d2[0]) / 4.0
    d1[1] -= d2[1]
    d3[1] = d4[1] = 0.0
    d2[0] = d3[0] = d4[0] = 0.0

    return _BesselTable(
        first_year=start,
        last_year=start + n - 1,
        dt=tuple(dt),
        d1=tuple(d1),
        d2=tuple(d2),
        d3=tuple(d3),
        d4=tuple(d4),
    )


_table: _BesselTable | None = None


def _get_table() -> _BesselTable:
    global _table
    if _table is None:
        _table = _build_table()
        logger.debug(
            'Delta-T table covers %d-%d', _table.first_year, _table.last_year
        )
    return _table


def _recent(u: float) -> float:
    return 102.0 + u * (102.0 + u * 25.3)


def _medieval(u: float) -> float:
    return 50.6 + u * (67.5 + u * 22.5)


def delta_t(jd: float) -> float:
    """Return TT - UT in seconds for a Julian day.

    Parameters:
        jd: Julian day (UT or TT; the difference is immaterial here).

    Returns:
        Delta-T in seconds.
    """
    table = _get_table()
    year = 2000.0 + (jd - 2451545.0) / 365.25
    u = (year - 2000.0) / 100.0
    if year >= table.last_year:
        d = _recent(u)
        if year < 2100.0:
            u_end = (table.last_year - 2000.0) / 100.0
            d += ((year - 2100.0) / (table.last_year - 2100.0)) * (
                table.dt[-1] / 100.0 - _recent(u_end)
            )
        return d
    if year < 948.0:
        return 2178.45936 + u * (497.0 + u * 44.1)
    if year < table.first_year:
        d = _medieval(u)
        if year > table.first_year - 20:
            u_start = (table.first_year - 2000.0) / 100.0
            d += ((year - table.first_year + 20.0) / 20.0) * (
                table.dt[0] / 100.0 - _medieval(u_start)
            )
        return d
    x = int(year) - table.first_year
    frac = year - int(year)
    d = table.dt[x] + frac * (
        table.d1[x] + frac * (table.d2[x] + frac * (table.d3[x] + frac * table.d4[x]))
    )
    return d * 0.01
