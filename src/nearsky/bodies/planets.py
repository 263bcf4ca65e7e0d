"""Planet and Pluto specifications (Meeus chapters 33, 37, 41, and 55)."""

from __future__ import annotations

from nearsky.bodies.base import BodyId, BodySpec, ModelKind, TransformStep

# Heliocentric series, light time, then the ecliptic corrections.
PLANET_STEPS = (
    TransformStep.ECLIPTIC_ABERRATION,
    TransformStep.FK5,
    TransformStep.ECLIPTIC_TO_EQUATORIAL,
    TransformStep.PARALLAX,
    TransformStep.TO_J2000,
)

PLUTO_STEPS = (
    TransformStep.PRECESS_NUTATE,
    TransformStep.EQUATORIAL_ABERRATION,
    TransformStep.PARALLAX,
    TransformStep.TO_J2000,
)

MERCURY_SPEC = BodySpec(
    BodyId.MERCURY,
    'Mercury',
    ModelKind.PLANET,
    PLANET_STEPS,
    series_name='mercury',
    semidiameter_arcsec=3.36,
    phase_law=(-0.42, 0.0380, -0.000273, 0.000002),
)
VENUS_SPEC = BodySpec(
    BodyId.VENUS,
    'Venus',
    ModelKind.PLANET,
    PLANET_STEPS,
    series_name='venus',
    semidiameter_arcsec=8.41,
    phase_law=(-4.40, 0.0009, 0.000239, -0.00000065),
)
MARS_SPEC = BodySpec(
    BodyId.MARS,
    'Mars',
    ModelKind.PLANET,
    PLANET_STEPS,
    series_name='mars',
    semidiameter_arcsec=4.68,
    phase_law=(-1.52, 0.016),
)
JUPITER_SPEC = BodySpec(
    BodyId.JUPITER,
    'Jupiter',
    ModelKind.PLANET,
    PLANET_STEPS,
    series_name='jupiter',
    semidiameter_arcsec=98.44,
    phase_law=(-9.40, 0.005),
)
SATURN_SPEC = BodySpec(
    BodyId.SATURN,
    'Saturn',
    ModelKind.PLANET,
    PLANET_STEPS,
    series_name='saturn',
    semidiameter_arcsec=82.73,
    phase_law=(-8.88, 0.044),
    has_rings=True,
)
URANUS_SPEC = BodySpec(
    BodyId.URANUS,
    'Uranus',
    ModelKind.PLANET,
    PLANET_STEPS,
    series_name='uranus',
    semidiameter_arcsec=35.02,
    phase_law=(-7.19,),
)
NEPTUNE_SPEC = BodySpec(
    BodyId.NEPTUNE,
    'Neptune',
    ModelKind.PLANET,
    PLANET_STEPS,
    series_name='neptune',
    semidiameter_arcsec=33.50,
    phase_law=(-6.87,),
)
PLUTO_SPEC = BodySpec(
    BodyId.PLUTO,
    'Pluto',
    ModelKind.PLUTO,
    PLUTO_STEPS,
    semidiameter_arcsec=2.07,
    phase_law=(-1.00,),
)
