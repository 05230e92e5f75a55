from collections.abc import Callable
from dataclasses import dataclass

from corecount.platform.unix import GenericUnixProbe, read_physical_cpu_sysctl


@dataclass
class DarwinProbe(GenericUnixProbe):
    """Probe for macOS, physical cores from the hw.physicalcpu sysctl"""

    name: str = "darwin"
    query_physical_cpus: Callable[[], int] | None = read_physical_cpu_sysctl
