import logging
import os
import shutil
import subprocess
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from corecount.errors import DataUnparseable, QueryUnavailable
from corecount.platform.base import FallbackProbe

logger = logging.getLogger(__name__)

ONLINE_PROCESSORS_SYSCONF = "SC_NPROCESSORS_ONLN"

# sysctl lives in sbin, which is often missing from PATH (cron, launchd)
SYSCTL_PATHS = (Path("/usr/sbin/sysctl"), Path("/sbin/sysctl"))


def read_online_processors() -> int:
    """Return the amount of online processors according to sysconf"""
    try:
        return os.sysconf(ONLINE_PROCESSORS_SYSCONF)
    except (AttributeError, ValueError, OSError) as e:
        # AttributeError: no os.sysconf, ValueError: unknown name
        raise QueryUnavailable(f"sysconf({ONLINE_PROCESSORS_SYSCONF}) failed") from e


def find_sysctl() -> str:
    """Return the path to the sysctl executable"""
    sysctl = shutil.which("sysctl")
    if sysctl is not None:
        return sysctl

    for path in SYSCTL_PATHS:
        if os.access(path, os.X_OK):
            return str(path)

    raise QueryUnavailable("Could not find the sysctl executable")


def read_sysctl_int(name: str) -> int:
    """Return the integer value of the sysctl `name`"""
    sysctl = find_sysctl()

    try:
        output = subprocess.check_output(
            [sysctl, "-n", name], encoding="utf-8", stderr=subprocess.DEVNULL
        )
    except UnicodeDecodeError as e:
        raise DataUnparseable(f"sysctl {name} returned invalid utf-8") from e
    except (subprocess.CalledProcessError, OSError) as e:
        raise QueryUnavailable(f"sysctl {name} failed") from e

    try:
        return int(output.strip())
    except ValueError as e:
        raise DataUnparseable(f"sysctl {name} returned {output!r}") from e


def read_physical_cpu_sysctl() -> int:
    return read_sysctl_int("hw.physicalcpu")


@dataclass
class GenericUnixProbe(FallbackProbe):
    """
    Probe for unix-like systems

    Logical cores come from sysconf. Physical cores come from
    `query_physical_cpus` when given, else the logical count is used.
    """

    name: str = "unix"
    query_online_processors: Callable[[], int] = read_online_processors
    query_physical_cpus: Callable[[], int] | None = None

    def read_logical_count(self) -> int:
        return self.query_online_processors()

    def read_physical_count(self) -> int:
        if self.query_physical_cpus is None:
            raise QueryUnavailable(f"No physical core query on {self.name}")

        return self.query_physical_cpus()
