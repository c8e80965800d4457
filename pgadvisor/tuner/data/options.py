import logging
from typing import Any, Iterable

from pydantic import BaseModel, Field
from pydantic.types import PositiveInt, PositiveFloat

from pgadvisor.static.vars import APP_NAME_UPPER, MIN_SUPPORTED_VERSION, MAX_SUPPORTED_VERSION, DEFAULT_VERSION
from pgadvisor.tuner.data.workload import PG_WORKLOAD, PG_OS, PG_STORAGE, PG_BACKUP_TOOL

__all__ = ['PG_TUNE_USR_OPTIONS', 'translate_validation_errors']
_logger = logging.getLogger(APP_NAME_UPPER)


# =============================================================================
class PG_TUNE_USR_OPTIONS(BaseModel):
    """
    This class describes the machine and the workload of the PostgreSQL server to be tuned. Every field is
    frozen after validation; the tuning is a pure function of this record.
    """
    version: int = Field(
        default=DEFAULT_VERSION, ge=MIN_SUPPORTED_VERSION, le=MAX_SUPPORTED_VERSION, frozen=True,
        description='The major version of the PostgreSQL server. The supported range is [10, 18], default is 17.'
    )
    os: PG_OS = Field(
        frozen=True,
        description='The operating system of the database server. The effective_io_concurrency is only tuned on '
                    'Linux since other platforms do not support asynchronous prefetch.'
    )
    memory_gb: PositiveFloat = Field(
        ge=1, allow_inf_nan=False, frozen=True,
        description='The total memory of the server in GiB. PostgreSQL can run on less than 1 GiB but it is not '
                    'recommended.'
    )
    cpus: PositiveInt = Field(
        ge=1, frozen=True,
        description='The number of logical CPUs. Parallel query settings are only tuned from 4 CPUs onward.'
    )
    storage_type: PG_STORAGE = Field(
        frozen=True,
        description='The kind of storage backing the data directory. NVMe is considered a type of SSD.'
    )
    workload: PG_WORKLOAD = Field(
        frozen=True,
        description='The workload type of the database server. See :cls:`PG_WORKLOAD` for more details.'
    )
    max_conn: int | None = Field(
        default=None, ge=10, frozen=True,
        description='The maximum number of client connections. When not given, the value is derived from the '
                    'workload type.'
    )
    num_disks: PositiveInt = Field(
        ge=1, frozen=True,
        description='The number of disks in the storage array, used to scale the effective_io_concurrency.'
    )
    backup_method: PG_BACKUP_TOOL = Field(
        default=PG_BACKUP_TOOL.PG_DUMP, frozen=True,
        description='The backup tool in use. Default is pg_dump.'
    )
    num_replicas: int = Field(
        default=0, ge=0, frozen=True,
        description='The number of streaming replicas attached to this server. A non-zero value enables WAL '
                    'archiving and sizes the WAL senders.'
    )
    db_size_gb: PositiveFloat = Field(
        ge=1, allow_inf_nan=False, frozen=True,
        description='The expected database size in GiB, used to size the retained WAL for replicas.'
    )


# =============================================================================
# Human-readable validation messages, per field and per failure category
_VALIDATION_MESSAGES: dict[str, dict[str, str]] = {
    'version': {
        'type': 'The version is not a number. Please only include the major version number.',
        'min': f'The minimum supported version is {MIN_SUPPORTED_VERSION}.',
        'max': f'The maximum supported version is {MAX_SUPPORTED_VERSION}.',
    },
    'os': {
        'choice': 'The OS must be one of linux, windows, or macos.',
        'missing': 'The OS is required.',
    },
    'memory_gb': {
        'type': 'The memory size (in GB) must be a finite number.',
        'min': "The minimum allowed memory is 1GB. PostgreSQL can run on less, but it's not recommended.",
        'missing': 'The memory size (in GB) is required.',
    },
    'cpus': {
        'min': 'The minimum allowed CPU is 1.',
        'missing': 'The CPU count is required.',
    },
    'storage_type': {
        'choice': 'The storage type must be ssd, hdd, or network. NVMe is considered a type of ssd.',
        'missing': 'The storage type is required.',
    },
    'workload': {
        'choice': 'The workload must be one of webapp, oltp, warehouse, desktop, or mixed.',
        'missing': 'The workload type is required.',
    },
    'max_conn': {
        'type': 'The max connections must be a number.',
        'min': 'The minimum allowed connections is 10.',
    },
    'num_disks': {
        'type': 'The number of disks must be a number.',
        'min': 'The minimum allowed disks is 1.',
        'missing': 'The number of disks is required.',
    },
    'backup_method': {
        'choice': 'The backup method must be one of pg_dump, pg_basebackup, or pglogical.',
    },
    'num_replicas': {
        'type': 'The number of replicas must be a number.',
        'min': 'The minimum allowed replicas is 0.',
    },
    'db_size_gb': {
        'type': 'The database size must be a number.',
        'min': 'The DB size must be at least 1GB',
    },
}


def _categorize(error_type: str) -> str:
    match error_type:
        case 'missing':
            return 'missing'
        case 'enum' | 'literal_error':
            return 'choice'
        case 'greater_than_equal' | 'greater_than':
            return 'min'
        case 'less_than_equal' | 'less_than':
            return 'max'
        case _:
            return 'type'


def translate_validation_errors(failures: Iterable[dict[str, Any]]) -> dict[str, str]:
    """
    Flatten the pydantic validation failures (:meth:`ValidationError.errors`) into a mapping of field name to
    a human-readable message. Only the first failure of each field is kept. Fields without a dedicated message
    keep the pydantic message.
    """
    errors: dict[str, str] = {}
    for err in failures:
        if err['type'] == 'json_invalid':  # The position in the document is not a field
            field = '__root__'
        else:
            loc = tuple(x for x in err['loc'] if x not in ('body', 'query', 'options'))
            field = '.'.join(str(x) for x in loc) or '__root__'
        if field in errors:
            continue
        messages = _VALIDATION_MESSAGES.get(field, {})
        errors[field] = messages.get(_categorize(err['type']), err['msg'])
    _logger.debug(f'The tuning options are rejected: {errors}')
    return errors
