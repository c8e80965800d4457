from pgadvisor.tuner.data.workload import PG_WORKLOAD

__all__ = ['max_connections', 'superuser_reserved_connections', 'wal_senders', 'archive_mode']

# ==================================================================================================
_MAX_CONNECTIONS: dict[PG_WORKLOAD, int] = {
    PG_WORKLOAD.WEBAPP: 200,
    PG_WORKLOAD.OLTP: 300,
    PG_WORKLOAD.WAREHOUSE: 40,
    PG_WORKLOAD.DESKTOP: 20,
    PG_WORKLOAD.MIXED: 100,
}
_BASE_WAL_SENDERS: int = 10
_REPLICAS_IN_BASE_WAL_SENDERS: int = 7


def max_connections(workload: PG_WORKLOAD) -> int:
    """ The connection count when the user does not give one """
    return _MAX_CONNECTIONS[workload]


def superuser_reserved_connections(workload: PG_WORKLOAD) -> int:
    if workload == PG_WORKLOAD.DESKTOP:
        return 1
    return 3


def wal_senders(num_replicas: int) -> int:
    """
    The WAL senders for the streaming replicas. Up to 7 replicas, the PostgreSQL default of 10 leaves room
    for the base backups; above that, one sender is added per extra replica.
    """
    if num_replicas <= 0:
        return 0
    if num_replicas < _REPLICAS_IN_BASE_WAL_SENDERS + 1:
        return _BASE_WAL_SENDERS
    return _BASE_WAL_SENDERS + (num_replicas - _REPLICAS_IN_BASE_WAL_SENDERS)


def archive_mode(num_replicas: int) -> dict[str, str]:
    # The archive_command is a placeholder to be replaced by the real archiving tool
    if num_replicas > 0:
        return {'archive_mode': 'on', 'archive_command': '/bin/true'}
    return {}
