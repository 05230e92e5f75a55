import logging
import sys

from corecount.platform.base import CoreProbe, UnknownProbe
from corecount.platform.darwin import DarwinProbe
from corecount.platform.linux import LinuxProbe
from corecount.platform.unix import GenericUnixProbe, read_physical_cpu_sysctl
from corecount.platform.windows import WindowsProbe

logger = logging.getLogger(__name__)

BSD_PLATFORM_PREFIXES = ("freebsd", "openbsd", "netbsd", "dragonfly")
UNIX_PLATFORM_PREFIXES = ("sunos", "aix", "cygwin", "haiku")


def select_probe(platform: str = sys.platform) -> CoreProbe:
    """Return the core probe for the given platform"""
    if platform == "win32":
        return WindowsProbe()

    if platform.startswith("linux"):
        return LinuxProbe()

    if platform == "darwin":
        return DarwinProbe()

    if platform.startswith(BSD_PLATFORM_PREFIXES):
        return GenericUnixProbe(
            name="bsd", query_physical_cpus=read_physical_cpu_sysctl
        )

    if platform.startswith(UNIX_PLATFORM_PREFIXES):
        return GenericUnixProbe()

    logger.debug(f"Unsupported platform {platform!r}, assuming a single core")
    return UnknownProbe()
