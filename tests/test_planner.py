"""Unit tests for the planner hints and warnings."""

import pytest

from pgadvisor.tuner.profile.planner import (
    HIGH_MEMORY_WARNING,
    default_statistics_target,
    effective_io_concurrency,
    random_page_cost,
    warning_messages,
)


class TestRandomPageCost:
    """Tests for random_page_cost."""

    def test_per_storage(self):
        assert random_page_cost("hdd") == 4.0
        assert random_page_cost("ssd") == 1.1
        assert random_page_cost("network") == 1.1


class TestEffectiveIoConcurrency:
    """Tests for effective_io_concurrency."""

    @pytest.mark.parametrize("os", ["macos", "windows"])
    def test_absent_outside_linux(self, os):
        assert effective_io_concurrency(os, "ssd", 4) is None

    @pytest.mark.parametrize(
        "storage_type, num_disks, expected",
        [("ssd", 1, 200), ("ssd", 2, 200), ("ssd", 3, 400), ("ssd", 4, 400), ("hdd", 1, 2), ("network", 3, 600)],
    )
    def test_linux(self, storage_type, num_disks, expected):
        assert effective_io_concurrency("linux", storage_type, num_disks) == expected


class TestStatisticsAndWarnings:
    """Tests for default_statistics_target and warning_messages."""

    def test_statistics_target(self):
        assert default_statistics_target("warehouse") == 500
        assert default_statistics_target("webapp") == 100

    def test_high_memory_warning(self):
        assert warning_messages(300) == [HIGH_MEMORY_WARNING]

    @pytest.mark.parametrize("memory_gb", [1, 8, 256])
    def test_no_warning(self, memory_gb):
        assert warning_messages(memory_gb) == []
