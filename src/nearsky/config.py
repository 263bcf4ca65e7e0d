"""Configuration: engine defaults and leap-second path from environment."""

import os

# Environment flags accept the usual truthy spellings.
_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _env_flag(name: str) -> bool:
    return os.environ.get(name, '').strip().lower() in _TRUE_VALUES


def get_geocentric_default() -> bool:
    """Return whether pure geocentric mode is on (NEARSKY_GEOCENTRIC env var).

    Returns:
        True when diurnal parallax should be skipped by default.
    """
    return _env_flag('NEARSKY_GEOCENTRIC')


def get_ignore_delta_t() -> bool:
    """Return whether delta-T should be treated as zero (NEARSKY_IGNORE_DELTA_T).

    Returns:
        True when JDE should equal the UT Julian day.
    """
    return _env_flag('NEARSKY_IGNORE_DELTA_T')


def get_leapsecs_path() -> str | None:
    """Return path to a NAIF LSK leap seconds file for rms-julian.

    Returns:
        NEARSKY_LEAPSECS value, or None to use the kernel bundled with rms-julian.
    """
    path = os.environ.get('NEARSKY_LEAPSECS', '').strip()
    return path or None


def get_log_level_name() -> str:
    """Return the CLI log level name from NEARSKY_LOG (upper case, may be empty)."""
    return os.environ.get('NEARSKY_LOG', '').strip().upper()
