"""Tests for protocol size limits."""

from unittest.mock import patch

from client_core import protocol
from client_core.protocol import MAX_REQUEST_SIZE, MAX_RESPONSE_SIZE, force_flush_threshold


class TestLimits:
    def test_sizes(self):
        assert MAX_REQUEST_SIZE == 100 * 1024 * 1024
        assert MAX_RESPONSE_SIZE == 100 * 1024 * 1024

    def test_threshold_leaves_room_for_overhead(self):
        assert force_flush_threshold() == MAX_REQUEST_SIZE - 10 * 1024

    def test_threshold_follows_request_size(self):
        with patch.object(protocol, "MAX_REQUEST_SIZE", 1024 * 1024):
            assert force_flush_threshold() == 1024 * 1024 - 10 * 1024
