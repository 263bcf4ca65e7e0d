"""Body identifiers and the per-body model/transform policy dataclass."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class BodyId(IntEnum):
    """Queryable bodies in their fixed order (Earth is the observer, not a body)."""

    MERCURY = 0
    VENUS = 1
    MARS = 2
    JUPITER = 3
    SATURN = 4
    URANUS = 5
    NEPTUNE = 6
    PLUTO = 7
    SUN = 8
    MOON = 9


class ModelKind(Enum):
    """Which theory produces a body's raw coordinates."""

    PLANET = 'planet'  # heliocentric series, minus Earth
    PLUTO = 'pluto'  # Pluto series, J2000 equatorial
    SUN = 'sun'  # Earth's heliocentric position reversed
    MOON = 'moon'  # lunar theory, already geocentric


class TransformStep(Enum):
    """One correction in a body's pipeline, applied in the listed order."""

    ECLIPTIC_ABERRATION = 'ecliptic-aberration'  # apparent output only
    FK5 = 'fk5'
    ECLIPTIC_TO_EQUATORIAL = 'ecliptic-to-equatorial'
    PRECESS_NUTATE = 'precess-nutate'
    EQUATORIAL_ABERRATION = 'equatorial-aberration'  # apparent output only
    PARALLAX = 'parallax'  # skipped in geocentric mode
    TO_J2000 = 'to-j2000'  # J2000 output only


APPARENT_ONLY_STEPS = frozenset(
    {TransformStep.ECLIPTIC_ABERRATION, TransformStep.EQUATORIAL_ABERRATION}
)


@dataclass(frozen=True)
class BodySpec:
    """Model choice, correction pipeline, and photometric constants for a body.

    Attributes:
        body_id: Identifier.
        name: Display name.
        kind: Theory producing raw coordinates.
        steps: Corrections after the raw coordinates, in order.
        series_name: Heliocentric series table (planets only).
        semidiameter_arcsec: Apparent semi-diameter at 1 AU.
        phase_law: Magnitude polynomial coefficients in phase angle (degrees),
            lowest power first; empty when no magnitude is defined.
        has_rings: Apply the Saturn ring brightness term.
    """

    body_id: BodyId
    name: str
    kind: ModelKind
    steps: tuple[TransformStep, ...]
    series_name: str | None = None
    semidiameter_arcsec: float = 0.0
    phase_law: tuple[float, ...] = ()
    has_rings: bool = False
