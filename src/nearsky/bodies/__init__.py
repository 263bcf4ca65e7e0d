"""Body registry: identifier to model and correction-pipeline dispatch."""

from __future__ import annotations

import logging

from nearsky.bodies.base import (
    APPARENT_ONLY_STEPS,
    BodyId,
    BodySpec,
    ModelKind,
    TransformStep,
)
from nearsky.bodies.luminaries import MOON_SPEC, SUN_SPEC
from nearsky.bodies.planets import (
    JUPITER_SPEC,
    MARS_SPEC,
    MERCURY_SPEC,
    NEPTUNE_SPEC,
    PLUTO_SPEC,
    SATURN_SPEC,
    URANUS_SPEC,
    VENUS_SPEC,
)

logger = logging.getLogger(__name__)

__all__ = [
    'APPARENT_ONLY_STEPS',
    'BODY_SPECS',
    'BodyId',
    'BodySpec',
    'ModelKind',
    'TransformStep',
    'get_body_spec',
    'parse_body',
]

BODY_SPECS: dict[BodyId, BodySpec] = {
    spec.body_id: spec
    for spec in (
        MERCURY_SPEC,
        VENUS_SPEC,
        MARS_SPEC,
        JUPITER_SPEC,
        SATURN_SPEC,
        URANUS_SPEC,
        NEPTUNE_SPEC,
        PLUTO_SPEC,
        SUN_SPEC,
        MOON_SPEC,
    )
}


def get_body_spec(body: int) -> BodySpec | None:
    """Return the spec for a body identifier (BodyId or plain int 0-9).

    Parameters:
        body: Body identifier.

    Returns:
        BodySpec, or None (logged) when the identifier is out of range.
    """
    try:
        return BODY_SPECS[BodyId(body)]
    except ValueError:
        logger.warning('Body identifier %r out of range 0-9', body)
        return None


def parse_body(token: str) -> BodyId:
    """Convert a body name or index string to a BodyId (case-insensitive).

    Raises:
        ValueError: If the token names no body.
    """
    s = token.strip()
    if s.lstrip('-').isdigit():
        try:
            return BodyId(int(s))
        except ValueError:
            raise ValueError(f'Body index out of range 0-9: {token!r}') from None
    try:
        return BodyId[s.upper()]
    except KeyError:
        raise ValueError(f'Unknown body: {token!r}') from None
