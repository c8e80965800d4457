"""Shared fixtures for the advisor tests."""

import pytest

from pgadvisor.tuner.data.options import PG_TUNE_USR_OPTIONS


def make_options(**overrides) -> PG_TUNE_USR_OPTIONS:
    values = {
        "version": 17,
        "os": "linux",
        "memory_gb": 8,
        "cpus": 8,
        "storage_type": "ssd",
        "workload": "webapp",
        "num_disks": 1,
        "num_replicas": 0,
        "db_size_gb": 50,
    }
    values.update(overrides)
    return PG_TUNE_USR_OPTIONS(**values)


@pytest.fixture
def webapp_options() -> PG_TUNE_USR_OPTIONS:
    """An 8 GiB / 8 CPU Linux web server on a single SSD."""
    return make_options()
