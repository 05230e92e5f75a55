from corecount.counts import CoreCounts, get_core_counts, logical_count, physical_count

VERSION_STRING = "v1.0.0"

__all__ = [
    "VERSION_STRING",
    "CoreCounts",
    "get_core_counts",
    "logical_count",
    "physical_count",
]
