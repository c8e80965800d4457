import logging
from math import ceil, floor

from pgadvisor.static.vars import APP_NAME_UPPER
from pgadvisor.tuner.data.workload import PG_WORKLOAD

__all__ = ['parallel_settings']
_logger = logging.getLogger(APP_NAME_UPPER)

# ==================================================================================================
_MIN_PARALLEL_CPUS: int = 4
_MAX_WORKERS_PER_GATHER: int = 4
_MAX_MAINTENANCE_WORKERS: int = 4


def parallel_settings(version: int, workload: PG_WORKLOAD, cpus: int) -> dict[str, int]:
    """
    Size the background and parallel query workers from the CPU count. Below 4 CPUs, nothing is tuned and
    the PostgreSQL defaults apply. Half of the CPUs serve a single Gather node, capped at 4 except on the
    warehouse where long analytical queries benefit from wider plans.

    Returns:
    -------
    dict[str, int]
        The max_worker_processes and max_parallel_workers_per_gather; plus the max_parallel_workers from
        PostgreSQL 10 and the max_parallel_maintenance_workers from PostgreSQL 11.

    """
    if cpus < _MIN_PARALLEL_CPUS:
        _logger.debug(f'Only {cpus} CPUs are available, the parallel settings are not tuned.')
        return {}

    workers_per_gather = ceil(cpus / 2)
    if workload != PG_WORKLOAD.WAREHOUSE and workers_per_gather > _MAX_WORKERS_PER_GATHER:
        workers_per_gather = _MAX_WORKERS_PER_GATHER

    config: dict[str, int] = {
        'max_worker_processes': cpus,
        'max_parallel_workers_per_gather': workers_per_gather,
    }
    if version >= 10:
        config['max_parallel_workers'] = cpus
    if version >= 11:
        maintenance_workers = floor(cpus / 2) if cpus > 2 else 1
        config['max_parallel_maintenance_workers'] = min(maintenance_workers, _MAX_MAINTENANCE_WORKERS)
    return config
