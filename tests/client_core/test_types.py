"""Tests for client_core.types module."""

import pytest

from client_core.types import CompressionCodec, ErrorCategory, RequiredAcks


class TestErrorCategory:
    def test_values(self):
        assert ErrorCategory.TRANSIENT.value == "transient"
        assert ErrorCategory.PERMANENT.value == "permanent"
        assert ErrorCategory.UNKNOWN.value == "unknown"

    def test_from_value(self):
        assert ErrorCategory("permanent") is ErrorCategory.PERMANENT


class TestRequiredAcks:
    def test_wire_values(self):
        assert RequiredAcks.NO_RESPONSE == 0
        assert RequiredAcks.WAIT_FOR_LOCAL == 1
        assert RequiredAcks.WAIT_FOR_ALL == -1

    def test_compares_as_int(self):
        assert RequiredAcks.WAIT_FOR_ALL < RequiredAcks.NO_RESPONSE < 2


class TestCompressionCodec:
    def test_wire_values(self):
        assert [int(c) for c in CompressionCodec] == [0, 1, 2, 3, 4]

    @pytest.mark.parametrize("name", ["gzip", "GZIP", " Gzip "])
    def test_from_name(self, name):
        assert CompressionCodec.from_name(name) is CompressionCodec.GZIP

    def test_from_name_unknown(self):
        with pytest.raises(ValueError, match="compression must be one of"):
            CompressionCodec.from_name("brotli")
