"""Heliocentric body models for Earth and the VSOP87-style planets."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from nearsky.coords import EclipticCoordinates
from nearsky.theory.series import SeriesTable, evaluate_series, get_series_table

logger = logging.getLogger(__name__)

VSOP_BODY_NAMES = (
    'mercury',
    'venus',
    'earth',
    'mars',
    'jupiter',
    'saturn',
    'uranus',
    'neptune',
)


@dataclass(frozen=True)
class HeliocentricBodyModel:
    """A named body whose heliocentric position comes from a series table.

    No error conditions: times far outside the fitted range still return
    values, of steadily degrading accuracy.
    """

    name: str
    table: SeriesTable

    def heliocentric(self, t: float) -> EclipticCoordinates:
        """Heliocentric ecliptic coordinates at t Julian millennia from J2000.0."""
        return evaluate_series(self.table, t)


# Registry of models, built lazily from the bundled tables.
_models: dict[str, HeliocentricBodyModel] = {}


def get_model(name: str) -> HeliocentricBodyModel:
    """Return the heliocentric model for a body name ('earth', 'mars', ...).

    Parameters:
        name: Lower-case body name, or 'earth_j2000' for Earth referred to
            the J2000 ecliptic.

    Returns:
        HeliocentricBodyModel for that body.

    Raises:
        KeyError: If no table exists for that name.
    """
    model = _models.get(name)
    if model is None:
        model = HeliocentricBodyModel(name, get_series_table(name))
        _models[name] = model
        logger.debug('Built heliocentric model for %s', name)
    return model


def earth_heliocentric(t: float) -> EclipticCoordinates:
    """Earth's heliocentric coordinates (mean ecliptic and equinox of date)."""
    return get_model('earth').heliocentric(t)
