"""End-to-end tests of the settings derivation."""

from pgadvisor import advisor
from pgadvisor.tuner.pg_dataclass import PG_TUNE_REQUEST, PG_TUNE_RESPONSE
from pgadvisor.tuner.profile.gtune import DB_DEFAULT_SETTINGS
from pgadvisor.tuner.profile.planner import HIGH_MEMORY_WARNING

from tests.conftest import make_options


class TestWebappScenario:
    """An 8 GiB / 8 CPU Linux web server with a single SSD and no replicas."""

    def test_tuned_settings(self, webapp_options):
        settings = advisor.optimize(webapp_options).settings
        assert settings["max_connections"] == 200
        assert settings["superuser_reserved_connections"] == 3
        assert settings["shared_buffers"] == "2GB"
        assert settings["effective_cache_size"] == "6GB"
        assert settings["maintenance_work_mem"] == "412MB"
        assert settings["huge_pages"] == "off"
        assert settings["default_statistics_target"] == 100
        assert settings["random_page_cost"] == 1.1
        assert settings["checkpoint_completion_target"] == 0.9
        assert settings["max_wal_senders"] == 0
        assert settings["wal_keep_size"] == "3GB"
        assert settings["effective_io_concurrency"] == 200
        assert settings["work_mem"] == "9MB"
        assert settings["wal_buffers"] == "-1"
        assert settings["min_wal_size"] == "1GB"
        assert settings["max_wal_size"] == "4GB"

    def test_parallel_settings_merged(self, webapp_options):
        settings = advisor.optimize(webapp_options).settings
        assert settings["max_worker_processes"] == 8
        assert settings["max_parallel_workers_per_gather"] == 4
        assert settings["max_parallel_workers"] == 8
        assert settings["max_parallel_maintenance_workers"] == 4

    def test_optional_groups_absent(self, webapp_options):
        settings = advisor.optimize(webapp_options).settings
        assert "archive_mode" not in settings
        assert "archive_command" not in settings
        assert "wal_level" not in settings

    def test_baseline_kept(self, webapp_options):
        settings = advisor.optimize(webapp_options).settings
        assert settings["checkpoint_timeout"] == "15min"
        assert settings["shared_preload_libraries"] == "'pg_stat_statements'"
        assert settings["bgwriter_lru_multiplier"] == 2.0
        assert settings["max_slot_wal_keep_size"] == "1GB"
        assert list(settings)[:len(DB_DEFAULT_SETTINGS)] == list(DB_DEFAULT_SETTINGS)

    def test_no_warnings(self, webapp_options):
        assert advisor.optimize(webapp_options).warnings == []

    def test_request_wrapper(self, webapp_options):
        """A request and its bare options should give the same result."""
        response = advisor.optimize(PG_TUNE_REQUEST(options=webapp_options))
        assert response == advisor.optimize(webapp_options)


class TestOtherScenarios:
    """Tests of the other workloads and the group overrides."""

    def test_desktop_on_macos(self):
        options = make_options(os="macos", memory_gb=4, cpus=2, storage_type="hdd", workload="desktop")
        settings = advisor.optimize(options).settings
        assert settings["max_connections"] == 20
        assert settings["superuser_reserved_connections"] == 1
        assert settings["shared_buffers"] == "256MB"
        assert settings["effective_cache_size"] == "1GB"
        assert settings["maintenance_work_mem"] == "256MB"
        assert settings["work_mem"] == "7MB"
        assert settings["random_page_cost"] == 4.0
        assert settings["wal_level"] == "minimal"
        assert settings["max_wal_senders"] == 0
        assert settings["min_wal_size"] == "100MB"
        assert "effective_io_concurrency" not in settings
        assert "max_parallel_maintenance_workers" not in settings
        assert settings["max_worker_processes"] == 8

    def test_replicas_enable_archiving(self):
        settings = advisor.optimize(make_options(num_replicas=2)).settings
        assert settings["max_wal_senders"] == 10
        assert settings["archive_mode"] == "on"
        assert settings["archive_command"] == "/bin/true"

    def test_desktop_wal_level_overrides_senders(self):
        """The desktop WAL level is merged last and resets the WAL senders."""
        options = make_options(workload="desktop", num_replicas=3)
        settings = advisor.optimize(options).settings
        assert settings["archive_mode"] == "on"
        assert settings["wal_level"] == "minimal"
        assert settings["max_wal_senders"] == 0

    def test_explicit_max_connections(self):
        settings = advisor.optimize(make_options(max_conn=500)).settings
        assert settings["max_connections"] == 500
        assert settings["maintenance_work_mem"] == "312MB"
        assert settings["work_mem"] == "4MB"

    def test_wal_buffers_before_version_14(self):
        assert advisor.optimize(make_options(version=13)).settings["wal_buffers"] == "16MB"

    def test_large_database_keeps_more_wal(self):
        assert advisor.optimize(make_options(db_size_gb=2048)).settings["wal_keep_size"] == "21GB"

    def test_high_memory_warning(self):
        response = advisor.optimize(make_options(memory_gb=300))
        assert response.warnings == [HIGH_MEMORY_WARNING]
        assert response.settings["huge_pages"] == "try"


class TestDeterminism:
    """The derivation should be a pure function of its options."""

    def test_identical_results(self, webapp_options):
        assert advisor.optimize(webapp_options) == advisor.optimize(webapp_options)

    def test_baseline_not_mutated(self, webapp_options):
        baseline = dict(DB_DEFAULT_SETTINGS)
        first = advisor.optimize(webapp_options)
        first.settings["shared_buffers"] = "1TB"
        assert dict(DB_DEFAULT_SETTINGS) == baseline
        assert advisor.optimize(webapp_options).settings["shared_buffers"] == "2GB"

    def test_fresh_response(self, webapp_options):
        assert advisor.optimize(webapp_options) is not advisor.optimize(webapp_options)
        assert isinstance(advisor.optimize(webapp_options), PG_TUNE_RESPONSE)

    def test_derive_settings_document(self, webapp_options):
        document = advisor.derive_settings(webapp_options)
        assert set(document) == {"settings", "warnings"}
        assert document["settings"]["work_mem"] == "9MB"
