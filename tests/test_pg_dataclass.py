"""Unit tests for the tuning response."""

import pytest

from pgadvisor import advisor
from pgadvisor.tuner.pg_dataclass import PG_TUNE_RESPONSE


class TestOutDisplay:
    """Tests for the postgresql.conf rendering of a value."""

    @pytest.mark.parametrize(
        "value, expected",
        [
            (0.9, "0.9"),
            (2.0, "2.0"),
            (16, "16"),
            ("on", "on"),
            ("200ms", "200ms"),
            ("2GB", "2GB"),
            ("/bin/true", "'/bin/true'"),
            ("-1", "'-1'"),
            ("'pg_stat_statements'", "'pg_stat_statements'"),
        ],
    )
    def test_values(self, value, expected):
        assert PG_TUNE_RESPONSE.out_display(value) == expected


class TestResponse:
    """Tests for the warnings and the content generation."""

    def test_warning_deduplicated(self):
        response = PG_TUNE_RESPONSE()
        response.add_warning("careful")
        response.add_warning("careful")
        assert response.warnings == ["careful"]

    def test_json_content(self, webapp_options):
        content = advisor.optimize(webapp_options).generate_content(output_format="json")
        assert content["settings"]["shared_buffers"] == "2GB"
        assert content["settings"]["random_page_cost"] == 1.1
        assert content["warnings"] == []

    def test_conf_content(self):
        response = PG_TUNE_RESPONSE(settings={"shared_buffers": "2GB", "archive_command": "/bin/true",
                                              "checkpoint_completion_target": 0.9})
        response.add_warning("careful")
        content = response.generate_content(output_format="conf")
        assert content.startswith("# Read this disclaimer")
        assert "\nshared_buffers = 2GB\n" in content
        assert "\narchive_command = '/bin/true'\n" in content
        assert "\ncheckpoint_completion_target = 0.9\n" in content
        assert content.endswith("# careful\n")

    def test_unsupported_format(self):
        with pytest.raises(ValueError):
            PG_TUNE_RESPONSE().generate_content(output_format="yaml")
