"""Unit tests for the validation of the tuning options."""

import pytest
from pydantic import ValidationError

from pgadvisor.tuner.data.options import PG_TUNE_USR_OPTIONS, translate_validation_errors
from pgadvisor.tuner.data.workload import PG_BACKUP_TOOL, PG_OS, PG_WORKLOAD

from tests.conftest import make_options


def _errors(**overrides) -> dict[str, str]:
    with pytest.raises(ValidationError) as exc_info:
        make_options(**overrides)
    return translate_validation_errors(exc_info.value.errors())


class TestDefaults:
    """Tests for the defaults and the coercion of the options."""

    def test_defaults(self):
        options = PG_TUNE_USR_OPTIONS(os="linux", memory_gb=8, cpus=4, storage_type="ssd", workload="oltp",
                                      num_disks=1, db_size_gb=10)
        assert options.version == 17
        assert options.max_conn is None
        assert options.backup_method == PG_BACKUP_TOOL.PG_DUMP
        assert options.num_replicas == 0

    def test_enums_from_strings(self, webapp_options):
        assert webapp_options.os == PG_OS.LINUX
        assert webapp_options.workload == PG_WORKLOAD.WEBAPP

    def test_query_strings_coerced(self):
        """Query parameters arrive as strings and should be coerced to numbers."""
        options = PG_TUNE_USR_OPTIONS.model_validate({
            "os": "linux", "memory_gb": "8", "cpus": "8", "storage_type": "ssd", "workload": "webapp",
            "num_disks": "1", "db_size_gb": "50", "max_conn": "150",
        })
        assert options.memory_gb == 8.0
        assert options.max_conn == 150

    def test_frozen(self, webapp_options):
        with pytest.raises(ValidationError):
            webapp_options.cpus = 16


class TestValidationMessages:
    """Tests for translate_validation_errors."""

    def test_version_bounds(self):
        assert _errors(version=9) == {"version": "The minimum supported version is 10."}
        assert _errors(version=19) == {"version": "The maximum supported version is 18."}

    def test_memory_minimum(self):
        assert _errors(memory_gb=0.5) == {
            "memory_gb": "The minimum allowed memory is 1GB. PostgreSQL can run on less, but it's not recommended."
        }

    def test_unknown_workload(self):
        assert _errors(workload="batch") == {
            "workload": "The workload must be one of webapp, oltp, warehouse, desktop, or mixed."
        }

    def test_connection_minimum(self):
        assert _errors(max_conn=5) == {"max_conn": "The minimum allowed connections is 10."}

    def test_negative_replicas(self):
        assert _errors(num_replicas=-1) == {"num_replicas": "The minimum allowed replicas is 0."}

    def test_not_a_number(self):
        assert _errors(num_disks="two") == {"num_disks": "The number of disks must be a number."}

    def test_missing_fields(self):
        with pytest.raises(ValidationError) as exc_info:
            PG_TUNE_USR_OPTIONS(memory_gb=8, cpus=4, storage_type="ssd", workload="oltp", num_disks=1,
                                db_size_gb=10)
        assert translate_validation_errors(exc_info.value.errors()) == {"os": "The OS is required."}

    def test_several_fields(self):
        errors = _errors(cpus=0, db_size_gb=0.1, storage_type="tape")
        assert errors == {
            "cpus": "The minimum allowed CPU is 1.",
            "db_size_gb": "The DB size must be at least 1GB",
            "storage_type": "The storage type must be ssd, hdd, or network. NVMe is considered a type of ssd.",
        }

    def test_request_body_location(self):
        """The body prefix of a request validation error should be dropped."""
        failures = [{"loc": ("body", "options", "version"), "type": "less_than_equal", "msg": "too large"}]
        assert translate_validation_errors(failures) == {"version": "The maximum supported version is 18."}

    @pytest.mark.parametrize("value", [float("inf"), "inf", "Infinity", float("nan")])
    def test_non_finite_memory(self, value):
        """Infinite or undefined memory sizes should be rejected."""
        assert _errors(memory_gb=value) == {"memory_gb": "The memory size (in GB) must be a finite number."}

    @pytest.mark.parametrize("value", [float("inf"), "Infinity", "nan"])
    def test_non_finite_database_size(self, value):
        assert _errors(db_size_gb=value) == {"db_size_gb": "The database size must be a number."}

    def test_malformed_document(self):
        """A JSON decoding failure is reported on the whole document, not on a position."""
        failures = [{"loc": ("body", 13), "type": "json_invalid", "msg": "JSON decode error"}]
        assert translate_validation_errors(failures) == {"__root__": "JSON decode error"}
