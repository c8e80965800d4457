from enum import StrEnum

__all__ = ['PG_WORKLOAD', 'PG_OS', 'PG_STORAGE', 'PG_BACKUP_TOOL',
           'FULL_BUFFER_WORKLOADS', 'SMALL_MAINTENANCE_WORKLOADS', 'SESSION_WORK_MEM_WORKLOADS']

# ==============================================================================
"""
This enum represents the typical usage patterns that drive the tuning. The workload decides which
memory fraction is granted to the shared buffers and the caches, the default connection count, and
the checkpoint sizing.
Options:
-------
WEBAPP = 'webapp' (Web Application)
    - Many short read-mostly queries served by an application pool.
    - Moderate connection count, small per-query memory.

OLTP = 'oltp' (Online Transaction Processing)
    - Frequent short transactions with constant writes and high concurrency.
    - Highest connection count, larger WAL between checkpoints.

WAREHOUSE = 'warehouse' (Data Warehouse / Analytics)
    - Few long-running analytical queries on large data sets with bulk loading.
    - Small connection count, large maintenance memory, more parallel workers per gather.

DESKTOP = 'desktop' (Developer Machine)
    - The database shares the host with other applications, so only a small slice of the memory is used.
    - Minimal WAL, no replication.

MIXED = 'mixed' (Mixed Workload)
    - A general-purpose blend of the above.

"""
class PG_WORKLOAD(StrEnum):
    WEBAPP = 'webapp'
    OLTP = 'oltp'
    WAREHOUSE = 'warehouse'
    DESKTOP = 'desktop'
    MIXED = 'mixed'


# Workload partitions (true set membership)
FULL_BUFFER_WORKLOADS: frozenset[PG_WORKLOAD] = frozenset({
    PG_WORKLOAD.WEBAPP, PG_WORKLOAD.OLTP, PG_WORKLOAD.WAREHOUSE, PG_WORKLOAD.MIXED
})
SMALL_MAINTENANCE_WORKLOADS: frozenset[PG_WORKLOAD] = frozenset({
    PG_WORKLOAD.WEBAPP, PG_WORKLOAD.OLTP, PG_WORKLOAD.DESKTOP, PG_WORKLOAD.MIXED
})
SESSION_WORK_MEM_WORKLOADS: frozenset[PG_WORKLOAD] = frozenset({PG_WORKLOAD.WEBAPP, PG_WORKLOAD.OLTP})


# =============================================================================
class PG_OS(StrEnum):
    LINUX = 'linux'
    WINDOWS = 'windows'
    MACOS = 'macos'


class PG_STORAGE(StrEnum):
    SSD = 'ssd'
    HDD = 'hdd'
    NETWORK = 'network'


class PG_BACKUP_TOOL(StrEnum):
    """ The backup tool in use. It is validated and kept with the options but no setting depends on it """
    PG_DUMP = 'pg_dump'
    PG_BASEBACKUP = 'pg_basebackup'
    PG_LOGICAL = 'pglogical'
