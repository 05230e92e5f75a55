import logging
from argparse import ArgumentParser
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

OutputMode = Literal["logical", "physical", "all", "workers"]


@dataclass
class Options:
    output_mode: OutputMode
    settings_path: Path
    loglevel: int | None


def resolve_path(p: str) -> Path:  # pragma: no cover
    """Construct the path from p and resolve it to lock the effects of cwd"""
    return Path(p).resolve()


def get_options(
    default_settings_path: Path, args: Sequence[str] | None = None
) -> Options:
    # We pass args manually in testing -> don't exit on error
    parser = ArgumentParser(
        prog="corecount",
        description="Print the amount of CPU cores on this machine",
        exit_on_error=args is None,
    )

    output_group = parser.add_mutually_exclusive_group()

    output_group.add_argument(
        "-p",
        "--physical",
        help="Print the amount of physical cores instead of logical cores",
        action="store_const",
        const="physical",
        dest="output_mode",
    )

    output_group.add_argument(
        "-a",
        "--all",
        help="Print logical cores, physical cores and the probe used",
        action="store_const",
        const="all",
        dest="output_mode",
    )

    output_group.add_argument(
        "-w",
        "--workers",
        help="Print the recommended amount of workers from the settings",
        action="store_const",
        const="workers",
        dest="output_mode",
    )

    parser.add_argument(
        "-s",
        "--settings",
        help="Path to the .toml settings-file",
        type=resolve_path,
        default=default_settings_path,
    )

    parser.add_argument(
        "-v",
        "--verbose",
        help="Log to a file with verbosity 1-5 (critical-debug)",
        action="count",
        default=0,
    )

    parser.set_defaults(output_mode="logical")

    # Parse the args
    # Parses from sys.argv if args is None
    parsed = parser.parse_args(args=args)

    assert parsed.output_mode in ("logical", "physical", "all", "workers")
    assert isinstance(parsed.settings, Path)
    assert isinstance(parsed.verbose, int)

    loglevel: int | None
    if parsed.verbose <= 0:
        # No logfile
        loglevel = None
    elif parsed.verbose == 1:
        loglevel = logging.CRITICAL
    elif parsed.verbose == 2:
        loglevel = logging.ERROR
    elif parsed.verbose == 3:
        loglevel = logging.WARNING
    elif parsed.verbose == 4:
        loglevel = logging.INFO
    elif parsed.verbose >= 5:
        loglevel = logging.DEBUG

    return Options(
        output_mode=parsed.output_mode,
        settings_path=parsed.settings,
        loglevel=loglevel,
    )
