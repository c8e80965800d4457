"""
This module contains the baseline settings and the ordered tuning profile of the database configuration.
The order of :var:`DB_CONFIG_PROFILE` is significant: the maintenance_work_mem reads the final
max_connections, the work_mem reads the shared_buffers, the max_connections and the staged parallel
settings, and the group merges at the end override anything published before them.

"""
import logging
from types import MappingProxyType
from typing import Any

from pgadvisor.static.vars import APP_NAME_UPPER
from pgadvisor.tuner.data.options import PG_TUNE_USR_OPTIONS
from pgadvisor.tuner.profile.common import type_validation
from pgadvisor.tuner.profile.connection import max_connections, superuser_reserved_connections, wal_senders, \
    archive_mode
from pgadvisor.tuner.profile.memory import shared_buffers, effective_cache_size, maintenance_work_mem, huge_pages, \
    work_mem, BASELINE_WORKER_PROCESSES
from pgadvisor.tuner.profile.parallel import parallel_settings
from pgadvisor.tuner.profile.planner import random_page_cost, effective_io_concurrency, default_statistics_target
from pgadvisor.tuner.profile.wal import wal_keep_size, wal_buffers, checkpoint_segments, \
    checkpoint_completion_target, wal_level

__all__ = ['DB_DEFAULT_SETTINGS', 'DB_CONFIG_PROFILE']
_logger = logging.getLogger(APP_NAME_UPPER)

# ==================================================================================================
# The settings applied regardless of the machine, before any tuning. This table is read-only and must be
# copied for every tuning request.
DB_DEFAULT_SETTINGS: MappingProxyType[str, Any] = MappingProxyType({
    # Checkpoint & WAL
    'checkpoint_timeout': '15min',
    'checkpoint_completion_target': 0.9,
    'wal_compression': 'on',
    'wal_buffers': -1,
    'wal_writer_delay': '200ms',
    'wal_writer_flush_after': '1MB',

    # Statistics & Extensions
    'shared_preload_libraries': "'pg_stat_statements'",
    'track_io_timing': 'on',
    'track_functions': 'pl',

    # Parallelism
    'max_worker_processes': BASELINE_WORKER_PROCESSES,
    'max_parallel_workers_per_gather': 2,
    'max_parallel_workers': 8,

    # Background Writer
    'bgwriter_delay': '200ms',
    'bgwriter_lru_maxpages': 100,
    'bgwriter_lru_multiplier': 2.0,
    'bgwriter_flush_after': 0,

    # Planner
    'enable_partitionwise_join': 'on',
    'enable_partitionwise_aggregate': 'on',
    'jit': 'on',

    # Others
    'track_wal_io_timing': 'on',
    'wal_recycle': 'on',
    'max_slot_wal_keep_size': '1GB',
})


# ==================================================================================================
def __max_connections(options: PG_TUNE_USR_OPTIONS) -> int:
    if options.max_conn is not None:
        return options.max_conn
    return max_connections(options.workload)


def __work_mem(group_cache: dict[str, Any], global_cache: dict[str, Any], options: PG_TUNE_USR_OPTIONS) -> str:
    return work_mem(options.memory_gb, global_cache['shared_buffers'], global_cache['max_connections'],
                    group_cache['parallel_settings'], options.workload)


DB_CONFIG_PROFILE: dict[str, dict[str, Any]] = {
    # Connections
    'max_connections': {
        'tune_op': lambda group_cache, global_cache, options: __max_connections(options),
        'comment': 'The maximum number of client connections, either given by the user or derived from the workload.',
    },
    'superuser_reserved_connections': {
        'tune_op': lambda group_cache, global_cache, options: superuser_reserved_connections(options.workload),
        'comment': 'The connection slots reserved for the superusers.',
    },

    # Memory
    'shared_buffers': {
        'tune_op': lambda group_cache, global_cache, options:
        shared_buffers(options.memory_gb, options.workload, options.os, options.version),
        'comment': 'The memory dedicated to caching the data pages.',
    },
    'effective_cache_size': {
        'tune_op': lambda group_cache, global_cache, options: effective_cache_size(options.memory_gb, options.workload),
        'comment': 'The planner estimate of the memory available for caching.',
    },
    'maintenance_work_mem': {
        'tune_op': lambda group_cache, global_cache, options:
        maintenance_work_mem(options.memory_gb, options.workload, options.os, global_cache['max_connections']),
        'comment': 'The memory of the maintenance operations, adjusted on the final max_connections.',
    },
    'huge_pages': {
        'tune_op': lambda group_cache, global_cache, options: huge_pages(options.memory_gb),
    },

    # Planner
    'default_statistics_target': {
        'tune_op': lambda group_cache, global_cache, options: default_statistics_target(options.workload),
    },
    'random_page_cost': {
        'tune_op': lambda group_cache, global_cache, options: random_page_cost(options.storage_type),
    },

    # Checkpoint & Replication
    'checkpoint_completion_target': {
        'tune_op': lambda group_cache, global_cache, options: checkpoint_completion_target(),
    },
    'max_wal_senders': {
        'tune_op': lambda group_cache, global_cache, options: wal_senders(options.num_replicas),
        'comment': 'The WAL senders for the streaming replicas.',
    },
    'wal_keep_size': {
        'tune_op': lambda group_cache, global_cache, options: wal_keep_size(options.db_size_gb),
        'comment': 'The WAL retained for the standby servers, stepped on the database size.',
    },
    'effective_io_concurrency': {
        'tune_op': lambda group_cache, global_cache, options:
        effective_io_concurrency(options.os, options.storage_type, options.num_disks),
        'comment': 'Only tuned on Linux; the setting is left out elsewhere.',
    },

    # Parallelism is staged first since the work_mem accounts for the worker processes
    'parallel_settings': {
        'tune_op': lambda group_cache, global_cache, options:
        parallel_settings(options.version, options.workload, options.cpus),
        'stage': True,
    },
    'work_mem': {
        'tune_op': __work_mem,
        'comment': 'The memory per sort/hash operation, shared by the connections and the worker processes.',
    },
    'wal_buffers': {
        'tune_op': lambda group_cache, global_cache, options: wal_buffers(options.version, global_cache['shared_buffers']),
    },

    # Group merges
    'parallel_group': {
        'tune_op': lambda group_cache, global_cache, options: group_cache['parallel_settings'],
        'merge': True,
    },
    'checkpoint_group': {
        'tune_op': lambda group_cache, global_cache, options: checkpoint_segments(options.workload),
        'merge': True,
    },
    'archive_group': {
        'tune_op': lambda group_cache, global_cache, options: archive_mode(options.num_replicas),
        'merge': True,
    },
    'wal_level_group': {
        'tune_op': lambda group_cache, global_cache, options: wal_level(options.workload),
        'merge': True,
    },
}
type_validation(DB_CONFIG_PROFILE)
