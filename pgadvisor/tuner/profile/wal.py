"""
This module contains the WAL and checkpoint calculators. The WAL retained for the replicas is sized from
the database size, the WAL buffers from the shared buffers, and the checkpoint distance from the workload.

"""
import logging
from math import floor

from pgadvisor.static.vars import APP_NAME_UPPER, Ki, Mi, Ti
from pgadvisor.tuner.data.sizing import format_size, gib_to_kib, parse_size
from pgadvisor.tuner.data.workload import PG_WORKLOAD

__all__ = ['wal_keep_size', 'wal_buffers', 'checkpoint_segments', 'checkpoint_completion_target', 'wal_level']
_logger = logging.getLogger(APP_NAME_UPPER)

# ==================================================================================================
_MiB_IN_KiB: int = Mi // Ki
_TiB_IN_KiB: int = Ti // Ki

# Retained WAL per database size: (database size at least (KiB), wal_keep_size (KiB))
_WAL_KEEP_SIZE_STEPS: tuple[tuple[int, int], ...] = (
    (10 * _TiB_IN_KiB, 109440 * _MiB_IN_KiB),
    (1 * _TiB_IN_KiB, 22080 * _MiB_IN_KiB),
)
_WAL_KEEP_SIZE_BASE: int = 3650 * _MiB_IN_KiB

_WAL_BUFFERS_AUTO_VERSION: int = 14
_WAL_BUFFERS_MAX: int = 16 * _MiB_IN_KiB
_WAL_BUFFERS_NEAR_MAX: int = 14 * _MiB_IN_KiB
_WAL_BUFFERS_MIN: int = 32

# The min_wal_size and max_wal_size (MiB) per workload
_CHECKPOINT_SEGMENTS: dict[PG_WORKLOAD, tuple[int, int]] = {
    PG_WORKLOAD.WEBAPP: (1024, 4096),
    PG_WORKLOAD.OLTP: (2048, 8192),
    PG_WORKLOAD.WAREHOUSE: (4096, 16384),
    PG_WORKLOAD.DESKTOP: (100, 4096),
    PG_WORKLOAD.MIXED: (1024, 4096),
}


# ==================================================================================================
def wal_keep_size(db_size_gb: int | float) -> str:
    """ The WAL retained for the standby servers, stepped on the database size (at least 1 TiB, 10 TiB) """
    kbytes = gib_to_kib(db_size_gb)
    for size_threshold, value in _WAL_KEEP_SIZE_STEPS:
        if kbytes >= size_threshold:
            return format_size(value)
    return format_size(_WAL_KEEP_SIZE_BASE)


def wal_buffers(version: int, shared_buffers_size: str) -> str:
    """
    From PostgreSQL 14, the server sizes the WAL buffers on its own (-1). Before that, 3% of the shared
    buffers is used, capped at 16 MiB (one WAL segment). A value just below the cap (14 MiB to 16 MiB) is
    rounded up to the cap, and 32 KiB is the floor.
    """
    if version >= _WAL_BUFFERS_AUTO_VERSION:
        return '-1'

    value = floor(3 * parse_size(shared_buffers_size) / 100)
    if value > _WAL_BUFFERS_MAX:
        value = _WAL_BUFFERS_MAX
    if _WAL_BUFFERS_NEAR_MAX < value < _WAL_BUFFERS_MAX:
        value = _WAL_BUFFERS_MAX
    if value < _WAL_BUFFERS_MIN:
        value = _WAL_BUFFERS_MIN
    return format_size(value)


def checkpoint_segments(workload: PG_WORKLOAD) -> dict[str, str]:
    min_wal_size, max_wal_size = _CHECKPOINT_SEGMENTS[workload]
    return {
        'min_wal_size': format_size(min_wal_size * _MiB_IN_KiB),
        'max_wal_size': format_size(max_wal_size * _MiB_IN_KiB),
    }


def checkpoint_completion_target() -> float:
    return 0.9


def wal_level(workload: PG_WORKLOAD) -> dict[str, str | int]:
    """ The desktop does not stream its WAL, so the minimal WAL level is enough """
    if workload == PG_WORKLOAD.DESKTOP:
        return {'wal_level': 'minimal', 'max_wal_senders': 0}
    return {}
