"""Unit tests for the connection and replication settings."""

import pytest

from pgadvisor.tuner.profile.connection import (
    archive_mode,
    max_connections,
    superuser_reserved_connections,
    wal_senders,
)


class TestMaxConnections:
    """Tests for max_connections."""

    @pytest.mark.parametrize(
        "workload, expected",
        [("webapp", 200), ("oltp", 300), ("warehouse", 40), ("desktop", 20), ("mixed", 100)],
    )
    def test_per_workload(self, workload, expected):
        assert max_connections(workload) == expected

    def test_superuser_reserved(self):
        assert superuser_reserved_connections("desktop") == 1
        assert superuser_reserved_connections("oltp") == 3


class TestWalSenders:
    """Tests for wal_senders."""

    @pytest.mark.parametrize(
        "num_replicas, expected",
        [(0, 0), (1, 10), (5, 10), (7, 10), (8, 11), (15, 18)],
    )
    def test_senders_per_replica(self, num_replicas, expected):
        assert wal_senders(num_replicas) == expected


class TestArchiveMode:
    """Tests for archive_mode."""

    def test_enabled_with_replicas(self):
        assert archive_mode(2) == {"archive_mode": "on", "archive_command": "/bin/true"}

    def test_untouched_without_replicas(self):
        assert archive_mode(0) == {}
