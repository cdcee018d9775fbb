"""
Unit tests for client key detection.
"""

import pytest

from menu_gateway.rate_limiting.client_identifier import UNKNOWN_CLIENT, identify_client


class TestIdentifyClient:
    def test_first_forwarded_for_entry(self):
        headers = {"X-Forwarded-For": "198.51.100.7, 10.0.0.1, 10.0.0.2"}

        assert identify_client(headers, "10.0.0.3") == "198.51.100.7"

    def test_forwarded_for_skips_unknown_entry(self):
        headers = {"X-Forwarded-For": "unknown, 203.0.113.5"}

        assert identify_client(headers) == "203.0.113.5"

    def test_forwarded_for_is_trimmed(self):
        assert identify_client({"X-Forwarded-For": "   203.0.113.9  "}) == "203.0.113.9"

    def test_header_lookup_is_case_insensitive(self):
        assert identify_client({"x-forwarded-for": "203.0.113.1"}) == "203.0.113.1"
        assert identify_client({"X-REAL-IP": "203.0.113.2"}) == "203.0.113.2"

    def test_real_ip_when_no_forwarded_for(self):
        headers = {"X-Real-IP": " 192.0.2.10 "}

        assert identify_client(headers, "10.0.0.3") == "192.0.2.10"

    def test_real_ip_when_forwarded_for_only_unknown(self):
        headers = {"X-Forwarded-For": "unknown", "X-Real-IP": "192.0.2.11"}

        assert identify_client(headers) == "192.0.2.11"

    def test_peer_address_fallback(self):
        headers = {"X-Real-IP": "unknown"}

        assert identify_client(headers, "127.0.0.1") == "127.0.0.1"

    @pytest.mark.parametrize("peer", [None, "", "unknown"])
    def test_unknown_when_nothing_usable(self, peer):
        assert identify_client({}, peer) == UNKNOWN_CLIENT

    def test_never_returns_unknown_when_a_real_hop_exists(self):
        headers = {"X-Forwarded-For": "unknown, , 203.0.113.5"}

        assert identify_client(headers) != UNKNOWN_CLIENT
