"""
Count the logical and physical cores of the current machine

Nothing is cached. Every call queries the operating system again so changes to
the online processors are picked up.
"""

import logging
from dataclasses import dataclass

from corecount.platform import CoreProbe, select_probe

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CoreCounts:
    """Snapshot of the core counts from a single probe"""

    logical: int
    physical: int
    probe: str


def logical_count() -> int:
    """Return the amount of logical cores, including SMT siblings. At least 1"""
    return select_probe().logical_count()


def physical_count() -> int:
    """Return the amount of physical cores, the logical count if unknown"""
    return select_probe().physical_count()


def get_core_counts(probe: CoreProbe | None = None) -> CoreCounts:
    """Return both counts from the given probe, defaulting to the current platform"""
    if probe is None:
        probe = select_probe()

    counts = CoreCounts(
        logical=probe.logical_count(),
        physical=probe.physical_count(),
        probe=probe.name,
    )

    if counts.physical > counts.logical:
        logger.info(f"More physical than logical cores reported: {counts}")

    return counts
