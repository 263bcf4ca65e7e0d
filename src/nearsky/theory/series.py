"""Periodic-series evaluation for VSOP87-style heliocentric tables.

Each body's table is a set of groups L0..Ln, B0..Bn, R0..Rn. Every group is an
(n, 3) array of terms (A, B, C) contributing A*cos(B + C*t), with t in Julian
millennia from J2000.0. Groups are combined by Horner accumulation starting
from the highest power of t, and all sums are scaled by 1e-8.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from nearsky.coords import EclipticCoordinates, EclipticFrame, normalize_angle
from nearsky.data import load_table

SERIES_SCALE = 1.0e-8


@dataclass(frozen=True)
class SeriesTable:
    """Read-only coefficient groups for longitude, latitude, and radius."""

    name: str
    longitude: tuple[np.ndarray, ...]
    latitude: tuple[np.ndarray, ...]
    radius: tuple[np.ndarray, ...]
    frame: EclipticFrame = EclipticFrame.MEAN_OF_DATE


def _freeze_groups(groups: list[list[list[float]]]) -> tuple[np.ndarray, ...]:
    frozen = []
    for group in groups:
        arr = np.asarray(group, dtype=np.float64).reshape(-1, 3)
        arr.setflags(write=False)
        frozen.append(arr)
    return tuple(frozen)


# Tables built from the bundled JSON, keyed by body name.
_tables: dict[str, SeriesTable] = {}


def get_series_table(name: str) -> SeriesTable:
    """Return the series table for `name` ('earth', 'mars', 'earth_j2000', ...).

    Raises:
        KeyError: If the bundled data has no table of that name.
    """
    table = _tables.get(name)
    if table is None:
        raw = load_table('vsop87')[name]
        frame = EclipticFrame.J2000 if name.endswith('_j2000') else EclipticFrame.MEAN_OF_DATE
        table = SeriesTable(
            name=name,
            longitude=_freeze_groups(raw['L']),
            latitude=_freeze_groups(raw['B']),
            radius=_freeze_groups(raw['R']),
            frame=frame,
        )
        _tables[name] = table
    return table


def evaluate_groups(groups: tuple[np.ndarray, ...], t: float) -> float:
    """Sum groups as sum_k(group_k * t**k), highest power first (Horner).

    Parameters:
        groups: Term arrays, index k holding the coefficients of t**k.
        t: Julian millennia from J2000.0.

    Returns:
        Unscaled series value.
    """
    total = 0.0
    for group in reversed(groups):
        total *= t
        if len(group):
            # Smallest terms first, matching the published evaluation order.
            terms = group[::-1]
            total += float(np.sum(terms[:, 0] * np.cos(terms[:, 1] + terms[:, 2] * t)))
    return total


def evaluate_series(table: SeriesTable, t: float) -> EclipticCoordinates:
    """Heliocentric ecliptic coordinates of a body from its series table.

    Parameters:
        table: Body's coefficient table.
        t: Julian millennia from J2000.0.

    Returns:
        Longitude wrapped into [0, 2*pi), latitude in radians, radius in AU.
    """
    lon = evaluate_groups(table.longitude, t) * SERIES_SCALE
    lat = evaluate_groups(table.latitude, t) * SERIES_SCALE
    rad = evaluate_groups(table.radius, t) * SERIES_SCALE
    return EclipticCoordinates(normalize_angle(lon), lat, rad, table.frame)
