"""
This module contains the planner hints (random_page_cost, effective_io_concurrency and
default_statistics_target) and the advisory warnings attached to the tuning result.

"""
from math import ceil

from pgadvisor.tuner.data.workload import PG_WORKLOAD, PG_OS, PG_STORAGE

__all__ = ['random_page_cost', 'effective_io_concurrency', 'default_statistics_target', 'warning_messages',
           'HIGH_MEMORY_WARNING']

# ==================================================================================================
_IO_CONCURRENCY_PER_DISK: dict[PG_STORAGE, int] = {
    PG_STORAGE.SSD: 200,
    PG_STORAGE.HDD: 2,
    PG_STORAGE.NETWORK: 300,
}
_HIGH_MEMORY_GB: int = 256
HIGH_MEMORY_WARNING: str = 'WARNING this tool not being optimal for very high memory systems'


def random_page_cost(storage_type: PG_STORAGE) -> float:
    if storage_type == PG_STORAGE.HDD:
        return 4.0
    return 1.1


def effective_io_concurrency(os: PG_OS, storage_type: PG_STORAGE, num_disks: int) -> int | None:
    """
    The number of concurrent disk I/O the server can issue. Only Linux supports the asynchronous prefetch
    (posix_fadvise), so None is returned elsewhere and the setting is left out. A pair of disks counts as
    one more stripe.
    """
    if os != PG_OS.LINUX:
        return None
    stripes = ceil(num_disks / 2 if num_disks > 1 else 1)
    return _IO_CONCURRENCY_PER_DISK[storage_type] * stripes


def default_statistics_target(workload: PG_WORKLOAD) -> int:
    if workload == PG_WORKLOAD.WAREHOUSE:
        return 500
    return 100


def warning_messages(memory_gb: int | float) -> list[str]:
    if memory_gb > _HIGH_MEMORY_GB:
        return [HIGH_MEMORY_WARNING]
    return []
