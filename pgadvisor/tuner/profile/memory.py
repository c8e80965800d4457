"""
This module contains the memory calculators: shared_buffers, effective_cache_size, maintenance_work_mem,
huge_pages and work_mem. Every amount is computed in KiB from the total memory (in GiB) and rendered
with :func:`format_size`, except the work_mem which must account for the shared buffers already granted.

"""
import logging
from math import floor
from typing import Any

from pgadvisor.static.vars import APP_NAME_UPPER, Ki, Mi, Gi
from pgadvisor.tuner.data.sizing import format_size, gib_to_kib, parse_size
from pgadvisor.tuner.data.workload import (PG_WORKLOAD, PG_OS, FULL_BUFFER_WORKLOADS, SMALL_MAINTENANCE_WORKLOADS,
                                           SESSION_WORK_MEM_WORKLOADS)

__all__ = ['shared_buffers', 'effective_cache_size', 'maintenance_work_mem', 'huge_pages', 'work_mem',
           'BASELINE_WORKER_PROCESSES']
_logger = logging.getLogger(APP_NAME_UPPER)

# ==================================================================================================
_MiB_IN_KiB: int = Mi // Ki
_GiB_IN_KiB: int = Gi // Ki
_WINDOWS_SHARED_BUFFERS_LIMIT: int = 512 * _MiB_IN_KiB
_HUGE_PAGES_THRESHOLD: int = 32 * _GiB_IN_KiB
_MAINTENANCE_WORK_MEM_LIMIT: int = 2 * _GiB_IN_KiB
_MIN_WORK_MEM: int = 64
BASELINE_WORKER_PROCESSES: int = 8  # PostgreSQL default of max_worker_processes

# Step adjustment of the maintenance_work_mem: (connections above, maintenance above (KiB), delta (KiB))
_MAINTENANCE_STEP_DOWN: tuple[tuple[int, int, int], ...] = (
    (3000, 500 * _MiB_IN_KiB, -300 * _MiB_IN_KiB),
    (200, 300 * _MiB_IN_KiB, -200 * _MiB_IN_KiB),
    (100, 200 * _MiB_IN_KiB, -100 * _MiB_IN_KiB),
)
_FEW_CONNECTIONS: int = 20
_FEW_CONNECTIONS_BONUS: int = 100 * _MiB_IN_KiB


# ==================================================================================================
def shared_buffers(memory_gb: int | float, workload: PG_WORKLOAD, os: PG_OS, version: int) -> str:
    """
    The shared_buffers is the dedicated memory for caching the data pages. A quarter of the memory is granted
    for the server-dedicated workloads and a sixteenth on the desktop where other applications share the
    host. On Windows before PostgreSQL 10, the value is capped at 512 MiB.
    """
    kbytes = gib_to_kib(memory_gb)
    if workload in FULL_BUFFER_WORKLOADS:
        value = floor(kbytes / 4)
    else:
        value = floor(kbytes / 16)

    if os == PG_OS.WINDOWS and version < 10 and value > _WINDOWS_SHARED_BUFFERS_LIMIT:
        value = _WINDOWS_SHARED_BUFFERS_LIMIT
    return format_size(value)


def effective_cache_size(memory_gb: int | float, workload: PG_WORKLOAD) -> str:
    """ The planner estimate of the memory available for caching (shared buffers plus OS page cache) """
    kbytes = gib_to_kib(memory_gb)
    if workload in FULL_BUFFER_WORKLOADS:
        return format_size(floor(kbytes * 3 / 4))
    return format_size(floor(kbytes / 4))


def maintenance_work_mem(memory_gb: int | float, workload: PG_WORKLOAD, os: PG_OS, max_connections: int) -> str:
    """
    The maintenance_work_mem is granted to VACUUM, CREATE INDEX and ALTER TABLE ADD FOREIGN KEY. The base is
    a sixteenth of the memory (an eighth on warehouse), then one step adjustment based on the connection
    count is applied (the first matching rule wins), and the result is capped at 2 GiB (minus 1 MiB on
    Windows).
    """
    kbytes = gib_to_kib(memory_gb)
    if workload in SMALL_MAINTENANCE_WORKLOADS:
        value = floor(kbytes / 16)
    else:
        value = floor(kbytes / 8)

    for conn_threshold, value_threshold, delta in _MAINTENANCE_STEP_DOWN:
        if max_connections > conn_threshold and value > value_threshold:
            value += delta
            break
    else:
        if max_connections < _FEW_CONNECTIONS:
            value += _FEW_CONNECTIONS_BONUS

    if value >= _MAINTENANCE_WORK_MEM_LIMIT:
        value = _MAINTENANCE_WORK_MEM_LIMIT
        if os == PG_OS.WINDOWS:
            value -= _MiB_IN_KiB
    return format_size(value)


def huge_pages(memory_gb: int | float) -> str:
    """ Try the huge pages on the servers with at least 32 GiB of memory """
    if gib_to_kib(memory_gb) >= _HUGE_PAGES_THRESHOLD:
        return 'try'
    return 'off'


def work_mem(memory_gb: int | float, shared_buffers_size: str, max_connections: int,
             parallel: dict[str, Any], workload: PG_WORKLOAD) -> str:
    """
    The work_mem is the memory per sort/hash operation. The memory left after the shared buffers is split
    between the client connections and the worker processes, with a factor of 3 for the concurrent
    operations of a single query.

    Arguments:
    ---------
    memory_gb: int | float
        The total memory in GiB.
    shared_buffers_size: str
        The shared_buffers already computed, as a size string.
    max_connections: int
        The final max_connections.
    parallel: dict[str, Any]
        The parallel settings from :func:`parallel_settings`; its max_worker_processes is used when positive,
        otherwise the PostgreSQL default (8) is assumed.
    workload: PG_WORKLOAD
        The workload type. Web and OLTP keep the full share, desktop a sixth, others a half.

    """
    worker_processes = parallel.get('max_worker_processes', 0)
    if worker_processes <= 0:
        worker_processes = max(BASELINE_WORKER_PROCESSES, 1)
    available = gib_to_kib(memory_gb) - parse_size(shared_buffers_size)
    value = available / ((max_connections + worker_processes) * 3)

    if workload in SESSION_WORK_MEM_WORKLOADS:
        value = floor(value)
    elif workload == PG_WORKLOAD.DESKTOP:
        value = floor(value / 6)
    else:
        value = floor(value / 2)

    if value < _MIN_WORK_MEM:
        _logger.debug(f'The work_mem of {value} KiB is raised to the minimum of {_MIN_WORK_MEM} KiB.')
        value = _MIN_WORK_MEM
    return format_size(value)
