"""CLI entry point: nearsky positions|orbits subcommands."""

from __future__ import annotations

import argparse
import logging
import sys
from datetime import datetime, timezone
from typing import NoReturn, TextIO, cast

from nearsky.angle_utils import format_dms, format_hms, parse_angle
from nearsky.bodies import BODY_SPECS, BodyId, parse_body
from nearsky.config import get_log_level_name
from nearsky.constants import AU_KM, RAD2DEG, SECONDS_PER_DAY
from nearsky.ephemeris import ORBIT_VIEW_BODIES, Ephemeris
from nearsky.frames.observer import ObserverLocation
from nearsky.orbits import OrbitTracker
from nearsky.time_utils import Instant, instant_from_jd, instant_from_jde, jd_from_string

logger = logging.getLogger(__name__)

# Unix epoch as a Julian day
_JD_UNIX_EPOCH = 2440587.5


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or NEARSKY_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = get_log_level_name()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _angle_arg(text: str) -> float:
    value = parse_angle(text)
    if value is None:
        raise argparse.ArgumentTypeError(f'invalid angle: {text!r}')
    return value


def _body_arg(text: str) -> BodyId:
    try:
        return parse_body(text)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _orbit_body_arg(text: str) -> int:
    s = text.strip().lower()
    if s.isdigit() and int(s) < len(ORBIT_VIEW_BODIES):
        return int(s)
    if s in ORBIT_VIEW_BODIES:
        return ORBIT_VIEW_BODIES.index(s)
    raise argparse.ArgumentTypeError(f'unknown orbit body: {text!r}')


def _instant_from_args(args: argparse.Namespace) -> Instant:
    """Resolve --jde, --jd, or --time (default: now) to an Instant.

    Raises:
        ValueError: If --time cannot be parsed.
    """
    ignore = True if args.no_delta_t else None
    if args.jde is not None:
        return instant_from_jde(args.jde)
    if args.jd is not None:
        return instant_from_jd(args.jd, ignore)
    if args.time:
        return instant_from_jd(jd_from_string(args.time), ignore)
    now = datetime.now(timezone.utc)
    return instant_from_jd(_JD_UNIX_EPOCH + now.timestamp() / SECONDS_PER_DAY, ignore)


def _add_time_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--time', type=str, default='', help='UTC date/time (default: now)')
    group.add_argument('--jd', type=float, default=None, help='Julian day (UT)')
    group.add_argument('--jde', type=float, default=None, help='Julian Ephemeris Day (TT)')
    parser.add_argument(
        '--no-delta-t', action='store_true', help='Treat delta-T as zero; env: NEARSKY_IGNORE_DELTA_T'
    )
    parser.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')


def _format_size(body: BodyId, arcsec: float) -> str:
    if body in (BodyId.SUN, BodyId.MOON):
        return f'{arcsec / 60.0:.1f}′'
    return f'{arcsec:.2f}″'


def write_positions(
    ephemeris: Ephemeris,
    instant: Instant,
    bodies: list[BodyId],
    location: ObserverLocation | None,
    apparent: bool,
    stream: TextIO,
) -> None:
    """Write one line per body: RA, Dec, distance, magnitude, and angular size."""
    frame = 'apparent' if apparent else 'J2000'
    stream.write(f'JDE {instant.jde:.6f}  delta-T {instant.delta_t:.2f} s  ({frame})\n')
    stream.write(f'{"Body":<8} {"RA":<14} {"Dec":<14} {"Dist (AU)":>12} {"Mag":>6} {"Size":>8}\n')
    for body in bodies:
        pos = ephemeris.position(body, instant, location, apparent)
        mag = ephemeris.magnitude(body, instant, location)
        size = ephemeris.angular_size(body, instant, location)
        mag_text = f'{mag:6.2f}' if mag is not None else f'{"":6}'
        stream.write(
            f'{BODY_SPECS[body].name:<8} {format_hms(pos.ra):<14} {format_dms(pos.dec):<14} '
            f'{pos.distance:12.6f} {mag_text} {_format_size(body, size):>8}\n'
        )
        if body is BodyId.MOON:
            phase = ephemeris.moon_phase(instant, location, apparent)
            pct = round(phase.illuminated_fraction * 100)
            if pct >= 100:
                state = 'full'
            elif pct <= 0:
                state = 'new'
            else:
                state = 'waxing' if phase.waxing else 'waning'
            stream.write(
                f'{"":8} distance {pos.distance * AU_KM:.0f} km, {pct}% lit ({state}), '
                f'bright limb PA {phase.position_angle * RAD2DEG % 360.0:.1f}°\n'
            )


def _positions_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print body positions (positions subcommand).

    Parameters:
        parser: Argument parser (unused).
        args: Parsed args; time, location, and body selection.

    Returns:
        Exit code 0 on success, 1 on error.
    """
    del parser
    if (args.lat is None) != (args.lon is None):
        print('Error: --lat and --lon must be given together', file=sys.stderr)
        return 1
    location = None
    if args.lat is not None:
        location = ObserverLocation(args.lon, args.lat)
    geocentric = True if args.geocentric or location is None else None
    bodies = args.bodies or list(BodyId)
    try:
        instant = _instant_from_args(args)
        ephemeris = Ephemeris(geocentric=geocentric)
        write_positions(ephemeris, instant, bodies, location, not args.j2000, sys.stdout)
    except (ValueError, RuntimeError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def _orbits_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print Keplerian elements of heliocentric bodies (orbits subcommand)."""
    del parser
    indices = args.bodies or list(range(len(ORBIT_VIEW_BODIES)))
    try:
        instant = _instant_from_args(args)
        tracker = OrbitTracker()
        t = instant.millennia
        print(f'JDE {instant.jde:.6f}')
        print(
            f'{"Body":<8} {"p (AU)":>10} {"e":>8} {"i":>8} {"node":>8} {"peri":>8} {"nu":>8}'
        )
        for index in indices:
            el = tracker.elements(index, t)
            print(
                f'{ORBIT_VIEW_BODIES[index].capitalize():<8} {el.p:10.5f} {el.e:8.5f} '
                f'{el.i * RAD2DEG:8.3f} {el.node * RAD2DEG:8.3f} '
                f'{el.arg_periapsis * RAD2DEG:8.3f} {el.true_anomaly * RAD2DEG:8.3f}'
            )
    except (ValueError, RuntimeError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return 1
    return 0


def main() -> int:
    """Entry point for nearsky CLI (positions | orbits).

    Returns:
        Exit code 0 on success, 1 on failure.
    """
    parser = argparse.ArgumentParser(
        prog='nearsky',
        description='Positions of the Sun, Moon, planets, and Pluto.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    pos_parser = subparsers.add_parser('positions', help='RA/Dec, distance, magnitude, size')
    _add_time_args(pos_parser)
    pos_parser.add_argument('--lat', type=_angle_arg, default=None, help='Latitude (N positive)')
    pos_parser.add_argument('--lon', type=_angle_arg, default=None, help='Longitude (E positive)')
    pos_parser.add_argument(
        '--geocentric', action='store_true', help='Ignore parallax; env: NEARSKY_GEOCENTRIC'
    )
    pos_parser.add_argument('--j2000', action='store_true', help='Astrometric J2000 output')
    pos_parser.add_argument(
        'bodies', nargs='*', type=_body_arg, help='Body names or indices 0-9 (default: all)'
    )
    pos_parser.set_defaults(func=_positions_cmd)

    orb_parser = subparsers.add_parser('orbits', help='Keplerian elements for orbit views')
    _add_time_args(orb_parser)
    orb_parser.add_argument(
        'bodies', nargs='*', type=_orbit_body_arg, help='Body names or indices 0-8 (default: all)'
    )
    orb_parser.set_defaults(func=_orbits_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    return cast(int, args.func(parser, args))


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
