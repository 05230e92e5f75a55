"""
Print the amount of cores on this machine

Run from the root dir by `python -m corecount [--physical | --all | --workers]`
"""

import logging
import sys

from corecount.commandline import Options, get_options
from corecount.counts import get_core_counts, logical_count, physical_count
from corecount.directories import DEFAULT_SETTINGS_PATH, ensure_directory
from corecount.logging import setup_logging
from corecount.settings import get_settings
from corecount.workers import recommend_workers

logger = logging.getLogger(__name__)


def format_output(options: Options) -> str:
    """Compute the text to print for the given options"""
    if options.output_mode == "physical":
        return str(physical_count())

    if options.output_mode == "all":
        counts = get_core_counts()
        return (
            f"logical: {counts.logical}\n"
            f"physical: {counts.physical}\n"
            f"probe: {counts.probe}"
        )

    if options.output_mode == "workers":
        ensure_directory(options.settings_path.parent)
        settings = get_settings(options.settings_path)
        return str(recommend_workers(settings))

    return str(logical_count())


def main() -> None:  # pragma: nocover
    """Print the core counts"""
    options = get_options(default_settings_path=DEFAULT_SETTINGS_PATH)

    if options.loglevel is not None:
        setup_logging(options.loglevel)

    logger.info(f"Started with {sys.argv=} {options=}")

    try:
        print(format_output(options))
    except Exception:
        logger.exception("Exception caught in main!")
        raise


if __name__ == "__main__":  # pragma: nocover
    main()
