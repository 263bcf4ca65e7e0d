"""Sun and Moon specifications."""

from __future__ import annotations

from nearsky.bodies.base import BodyId, BodySpec, ModelKind, TransformStep
from nearsky.constants import AU_KM

SUN_SPEC = BodySpec(
    BodyId.SUN,
    'Sun',
    ModelKind.SUN,
    (
        TransformStep.FK5,
        TransformStep.ECLIPTIC_ABERRATION,
        TransformStep.ECLIPTIC_TO_EQUATORIAL,
        TransformStep.PARALLAX,
        TransformStep.TO_J2000,
    ),
    semidiameter_arcsec=959.63,
)

# No FK5, aberration, or light time for the Moon.
MOON_SPEC = BodySpec(
    BodyId.MOON,
    'Moon',
    ModelKind.MOON,
    (
        TransformStep.ECLIPTIC_TO_EQUATORIAL,
        TransformStep.PARALLAX,
        TransformStep.TO_J2000,
    ),
    semidiameter_arcsec=358473400.0 / AU_KM,
)
