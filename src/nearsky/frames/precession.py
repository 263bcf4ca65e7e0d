"""Precession from J2000.0 and the combined precession-nutation frame of a date."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from nearsky.constants import ARCSEC2RAD, DAYS_PER_CENTURY, J2000
from nearsky.frames.nutation import AberrationElements, Nutation, aberration_elements, nutation


def precession_matrix(jde: float) -> np.ndarray:
    """Rotation taking J2000 equatorial vectors to mean equatorial of date.

    Uses the zeta, z, theta angles of Meeus p. 134.

    Parameters:
        jde: Julian Ephemeris Day.

    Returns:
        Read-only 3x3 rotation matrix.
    """
    t = (jde - J2000) / DAYS_PER_CENTURY
    zeta = ((0.017998 * t + 0.30188) * t + 2306.2181) * t * ARCSEC2RAD
    z = ((0.018203 * t + 1.09468) * t + 2306.2181) * t * ARCSEC2RAD
    theta = ((0.041833 * t + 0.42665) * t + 2004.3109) * t * ARCSEC2RAD
    cx, sx = math.cos(zeta), math.sin(zeta)
    cz, sz = math.cos(z), math.sin(z)
    ct, st = math.cos(theta), math.sin(theta)
    m = np.array(
        [
            [cx * ct * cz - sx * sz, -(sx * ct * cz + cx * sz), -st * cz],
            [cx * ct * sz + sx * cz, cx * cz - sx * ct * sz, -st * sz],
            [cx * st, -sx * st, ct],
        ],
        dtype=np.float64,
    )
    m.setflags(write=False)
    return m


@dataclass(frozen=True)
class FrameState:
    """Everything frame-related that depends only on the instant.

    `precess_nutate` maps J2000 equatorial vectors to true equatorial of date
    (nutation applied after precession); `unprecess_nutate` is its inverse.
    """

    jde: float
    nutation: Nutation
    aberration: AberrationElements
    precession: np.ndarray
    precess_nutate: np.ndarray
    unprecess_nutate: np.ndarray


def frame_state(jde: float) -> FrameState:
    """Build the FrameState for a Julian Ephemeris Day."""
    nut = nutation(jde)
    prec = precession_matrix(jde)
    pn = nut.matrix @ prec
    pn.setflags(write=False)
    # A rotation's inverse is its transpose.
    unpn = np.ascontiguousarray(pn.T)
    unpn.setflags(write=False)
    return FrameState(jde, nut, aberration_elements(jde), prec, pn, unpn)
