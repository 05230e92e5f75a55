from pathlib import Path

import pytest


@pytest.fixture(scope="session")
def data_directory() -> Path:
    """Return a Path to the persistent data directory"""
    data_dir = Path(__file__).parent / "data"

    assert data_dir.is_dir()

    return data_dir


@pytest.fixture(scope="session")
def dual_socket_cpuinfo(data_directory: Path) -> Path:
    """cpuinfo for 2 sockets with 4 cores each and 2 threads per core"""
    return data_directory / "cpuinfo_dual_socket_smt.txt"


@pytest.fixture(scope="session")
def sparse_core_ids_cpuinfo(data_directory: Path) -> Path:
    """cpuinfo for 2 sockets with core ids 0, 1, 2 and 4, no SMT"""
    return data_directory / "cpuinfo_sparse_core_ids.txt"


@pytest.fixture(scope="session")
def arm_cpuinfo(data_directory: Path) -> Path:
    """cpuinfo from an arm board without core or physical ids"""
    return data_directory / "cpuinfo_arm.txt"
