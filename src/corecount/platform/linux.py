"""
Physical core detection on Linux

/proc/cpuinfo holds one block of `key : value` lines per logical processor.
We track the highest "core id" and the highest "physical id" over the whole
file and estimate the physical cores as

    (max core id + 1) * (max physical id + 1)

This assumes every socket has the same core ids populated, and overcounts on
asymmetric layouts. The estimate is kept as is so results stay comparable with
other tools using the same formula.
"""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Self

from corecount.errors import DataUnparseable, SourceUnreadable
from corecount.platform.unix import GenericUnixProbe

logger = logging.getLogger(__name__)

CPUINFO_PATH = Path("/proc/cpuinfo")

CORE_ID_FIELD = "core id"
PHYSICAL_ID_FIELD = "physical id"


def parse_field_value(line: str) -> int | None:
    """Return the integer value of a `key : value` line, None if invalid"""
    _, separator, value = line.partition(":")
    if not separator:
        return None

    value = value.strip()
    # Plain ascii digits only
    if not (value.isascii() and value.isdecimal()):
        return None

    return int(value)


@dataclass(frozen=True, slots=True)
class CpuinfoMaxima:
    """The highest core and physical id seen so far, -1 if none"""

    max_core_id: int = -1
    max_physical_id: int = -1

    def update(self, line: str) -> Self:
        """Return the maxima after observing `line`"""
        if line.startswith(CORE_ID_FIELD):
            value = parse_field_value(line)
            if value is not None and value > self.max_core_id:
                return type(self)(value, self.max_physical_id)
        elif line.startswith(PHYSICAL_ID_FIELD):
            value = parse_field_value(line)
            if value is not None and value > self.max_physical_id:
                return type(self)(self.max_core_id, value)

        return self

    @property
    def physical_core_count(self) -> int:
        if self.max_core_id < 0 or self.max_physical_id < 0:
            raise DataUnparseable(
                f"Missing '{CORE_ID_FIELD}' or '{PHYSICAL_ID_FIELD}' in cpuinfo"
            )

        return (self.max_core_id + 1) * (self.max_physical_id + 1)


def fold_cpuinfo(lines: Iterable[str]) -> CpuinfoMaxima:
    """Compute the id maxima over all lines of a cpuinfo file"""
    maxima = CpuinfoMaxima()
    for line in lines:
        maxima = maxima.update(line)

    return maxima


def read_cpuinfo_maxima(path: Path) -> CpuinfoMaxima:
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            return fold_cpuinfo(f)
    except OSError as e:
        raise SourceUnreadable(f"Could not read '{path}'") from e


@dataclass
class LinuxProbe(GenericUnixProbe):
    name: str = "linux"
    cpuinfo_path: Path = field(default=CPUINFO_PATH)

    def read_physical_count(self) -> int:
        maxima = read_cpuinfo_maxima(self.cpuinfo_path)
        logger.debug(f"Read {maxima} from {self.cpuinfo_path}")
        return maxima.physical_core_count
