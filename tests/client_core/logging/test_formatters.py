"""Tests for JSON and console log formatters."""

import json
import logging
import sys
from datetime import timedelta
from unittest.mock import patch

import pytest

from client_core.logging.context import clear_log_context, set_log_context
from client_core.logging.formatters import ConsoleFormatter, JSONFormatter
from client_core.types import CompressionCodec, ErrorCategory, RequiredAcks


def _make_record(
    msg="test message",
    level=logging.INFO,
    name="test.logger",
    exc_info=None,
    **extras,
):
    record = logging.LogRecord(
        name=name,
        level=level,
        pathname="test.py",
        lineno=42,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for key, value in extras.items():
        setattr(record, key, value)
    return record


@pytest.fixture(autouse=True)
def clear_context():
    clear_log_context()
    yield
    clear_log_context()


class TestJSONFormatter:

    def test_formats_basic_json_with_required_fields(self):
        output = json.loads(JSONFormatter().format(_make_record()))

        assert output["level"] == "INFO"
        assert output["logger"] == "test.logger"
        assert output["message"] == "test message"
        assert output["ts"].endswith("Z")

    def test_includes_client_id_and_component_from_context(self):
        set_log_context(client_id="orders", component="cli")
        output = json.loads(JSONFormatter().format(_make_record()))

        assert output["client_id"] == "orders"
        assert output["component"] == "cli"

    def test_omits_empty_context(self):
        output = json.loads(JSONFormatter().format(_make_record()))

        assert "client_id" not in output
        assert "component" not in output

    def test_includes_config_extras(self):
        record = _make_record(
            level=logging.WARNING,
            config_field="consumer.max_wait_time",
            config_value=timedelta(milliseconds=50),
        )
        output = json.loads(JSONFormatter().format(record))

        assert output["config_field"] == "consumer.max_wait_time"
        assert output["config_value"] == 0.05

    def test_enum_values_serialized_by_name(self):
        record = _make_record(config_value=CompressionCodec.SNAPPY)
        output = json.loads(JSONFormatter().format(record))

        assert output["config_value"] == "snappy"

    def test_int_enum_in_config_value_uses_name(self):
        record = _make_record(config_value=RequiredAcks.WAIT_FOR_ALL)
        output = json.loads(JSONFormatter().format(record))

        assert output["config_value"] == "wait_for_all"

    def test_plain_enum_uses_name(self):
        record = _make_record(error_category=ErrorCategory.PERMANENT)
        output = json.loads(JSONFormatter().format(record))

        assert output["error_category"] == "permanent"

    def test_ignores_unknown_extras(self):
        output = json.loads(JSONFormatter().format(_make_record(custom="x")))
        assert "custom" not in output

    def test_partition_coerced_to_int(self):
        output = json.loads(JSONFormatter().format(_make_record(partition="3")))
        assert output["partition"] == 3

    def test_bad_partition_becomes_null(self):
        output = json.loads(JSONFormatter().format(_make_record(partition="abc")))
        assert output["partition"] is None

    @pytest.mark.parametrize("level", [logging.DEBUG, logging.ERROR])
    def test_source_location_for_debug_and_error(self, level):
        output = json.loads(JSONFormatter().format(_make_record(level=level)))
        assert output["file"] == "test.py:42"

    def test_no_source_location_for_info(self):
        output = json.loads(JSONFormatter().format(_make_record()))
        assert "file" not in output

    def test_includes_exception(self):
        try:
            raise ValueError("boom")
        except ValueError:
            record = _make_record(level=logging.ERROR, exc_info=sys.exc_info())

        output = json.loads(JSONFormatter().format(record))

        assert output["exception"]["type"] == "ValueError"
        assert output["exception"]["message"] == "boom"
        assert "Traceback" in output["exception"]["stacktrace"]


class TestConsoleFormatter:

    @pytest.fixture
    def formatter(self):
        with patch("client_core.logging.formatters.sys") as mock_sys:
            mock_sys.stdout.isatty.return_value = False
            return ConsoleFormatter()

    def test_plain_line(self, formatter):
        line = formatter.format(_make_record())

        assert line.endswith(" - INFO - test message")

    def test_context_in_prefix(self, formatter):
        set_log_context(client_id="orders", component="cli")
        line = formatter.format(_make_record())

        assert " - INFO - [orders] - [cli] - test message" in line

    def test_config_field_shown(self, formatter):
        line = formatter.format(_make_record(msg="too low", config_field="consumer.max_wait_time"))

        assert line.endswith(" - INFO - [consumer.max_wait_time] too low")

    def test_colors_when_tty(self):
        with patch("client_core.logging.formatters.sys") as mock_sys:
            mock_sys.stdout.isatty.return_value = True
            formatter = ConsoleFormatter()

        line = formatter.format(_make_record(level=logging.WARNING))
        assert "\033[33mWARNING\033[0m" in line
