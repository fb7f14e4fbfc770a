"""CLI entry point: solar-system positions|eclipse|list subcommands."""

from __future__ import annotations

import argparse
import contextlib
import logging
import os
import sys
from collections.abc import Iterator
from datetime import datetime, timezone
from typing import NoReturn, TextIO, cast

from solar_system.config import SolarSystemConfig
from solar_system.errors import LoadError, UnknownOrbitFunctionError
from solar_system.report import write_header, write_positions
from solar_system.system import SolarSystem
from solar_system.time_utils import jde_from_string

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_UNKNOWN_ORBIT_FUNCTION = 2


def _configure_logging(verbose: bool = False) -> None:
    """Configure logging for CLI (stderr, level from --verbose or SSYSTEM_LOG)."""
    level = logging.DEBUG if verbose else logging.WARNING
    env_level = os.environ.get('SSYSTEM_LOG', '').upper()
    if env_level in ('DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'):
        level = getattr(logging, env_level)
    logging.basicConfig(
        level=level,
        format='%(levelname)s: %(name)s: %(message)s',
        stream=sys.stderr,
    )


def _resolve_jde(args: argparse.Namespace) -> float:
    """JDE from --jde, --time, or the current UTC time.

    Raises:
        ValueError: If --time cannot be parsed.
    """
    if args.jde is not None:
        return float(args.jde)
    text = args.time
    if not text:
        text = datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M:%S')
    jde = jde_from_string(text)
    if jde is None:
        raise ValueError(f'invalid time: {text!r}')
    return jde


def _load_system(args: argparse.Namespace) -> SolarSystem:
    config = SolarSystemConfig(flag_light_travel_time=not getattr(args, 'no_light_time', False))
    system = SolarSystem(config)
    minor = None if args.minor is None else list(args.minor)
    system.load_planets(args.major, minor)
    return system


@contextlib.contextmanager
def _open_output(path: str | None) -> Iterator[TextIO]:
    if path is None:
        yield sys.stdout
        return
    with open(path, 'w') as f:
        yield f


def _positions_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the positions table (positions subcommand).

    Returns:
        Exit code.
    """
    system = _load_system(args)
    system.compute_positions(_resolve_jde(args), args.observer)
    names = system.get_objects_list(args.type) if args.type else system.list_all_objects()
    with _open_output(args.output) as out:
        write_header(out, system)
        write_positions(out, system, names)
    return EXIT_OK


def _eclipse_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print the solar illumination factor at the observer (eclipse subcommand)."""
    system = _load_system(args)
    system.compute_positions(_resolve_jde(args), args.observer)
    factor = system.get_eclipse_factor()
    print(f'{factor:.6f}')
    if system.near_lunar_eclipse():
        logger.info('Moon is near the Earth shadow')
    return EXIT_OK


def _list_cmd(parser: argparse.ArgumentParser, args: argparse.Namespace) -> int:
    """Print body names, one per line (list subcommand)."""
    system = _load_system(args)
    names = system.get_objects_list(args.type) if args.type else system.list_all_objects()
    for name in names:
        print(name)
    return EXIT_OK


def _add_catalogue_args(p: argparse.ArgumentParser) -> None:
    p.add_argument('--major', type=str, default=None, help='Major bodies catalogue (INI)')
    p.add_argument(
        '--minor',
        type=str,
        nargs='*',
        default=None,
        help='Minor bodies catalogue candidates, first that loads wins (none: skip)',
    )
    p.add_argument('-v', '--verbose', action='store_true', help='Show DEBUG logs')


def _add_step_args(p: argparse.ArgumentParser) -> None:
    when = p.add_mutually_exclusive_group()
    when.add_argument('--time', type=str, default='', help='UTC time (default: now)')
    when.add_argument('--jde', type=float, default=None, help='Julian Ephemeris Day')
    p.add_argument('--observer', type=str, default=None, help='Observer body (default: Earth)')
    p.add_argument(
        '--no-light-time',
        action='store_true',
        help='Disable light-time correction (instantaneous positions)',
    )


def main() -> int:
    """Entry point for solar-system CLI (positions | eclipse | list).

    Returns:
        0 on success, 1 on load or input errors, 2 on an unknown orbit function.
    """
    parser = argparse.ArgumentParser(
        prog='solar-system',
        description='Solar System body catalogue and ephemeris.',
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    pos_parser = subparsers.add_parser('positions', help='Table of body positions')
    _add_step_args(pos_parser)
    pos_parser.add_argument('--type', type=str, default='', help='Body type filter, or "all"')
    pos_parser.add_argument('-o', '--output', type=str, default=None, help='Output file')
    _add_catalogue_args(pos_parser)
    pos_parser.set_defaults(func=_positions_cmd)

    ecl_parser = subparsers.add_parser('eclipse', help='Solar illumination at the observer')
    _add_step_args(ecl_parser)
    _add_catalogue_args(ecl_parser)
    ecl_parser.set_defaults(func=_eclipse_cmd)

    list_parser = subparsers.add_parser('list', help='List body names')
    list_parser.add_argument('--type', type=str, default='', help='Body type filter, or "all"')
    _add_catalogue_args(list_parser)
    list_parser.set_defaults(func=_list_cmd)

    args = parser.parse_args()
    _configure_logging(verbose=args.verbose)
    try:
        return cast(int, args.func(parser, args))
    except UnknownOrbitFunctionError as e:
        print(f'Error: {e}', file=sys.stderr)
        return EXIT_UNKNOWN_ORBIT_FUNCTION
    except (LoadError, ValueError, OSError) as e:
        print(f'Error: {e}', file=sys.stderr)
        return EXIT_ERROR


def cli_main() -> NoReturn:
    """Entry point for console_scripts; calls main() and exits with its return code."""
    sys.exit(main())


if __name__ == '__main__':
    sys.exit(main())
