"""
Tests for debug.py
Logic testing: Decision/Branch, Equivalence Partitioning
"""
from unittest.mock import patch

from aichat_client.debug import format_body, mask_headers, print_request, print_response


class TestMaskHeaders:
    """Tests for mask_headers function."""

    def test_masks_auth_headers(self):
        masked = mask_headers({"Authorization": "Bearer sk-1234567890abcdef", "X-API-Key": "short", "Accept": "*/*"})
        assert masked["Authorization"] == "Bearer sk-12345***"
        assert masked["X-API-Key"] == "*****"
        assert masked["Accept"] == "*/*"


class TestFormatBody:
    """Tests for format_body function."""

    def test_none(self):
        assert format_body(None) == ""

    def test_dict(self):
        assert format_body({"a": "é"}) == '{\n  "a": "é"\n}'

    def test_bytes(self):
        assert format_body(b"hi") == "hi"

    # Equivalence: undecodable bytes summarized
    def test_binary(self):
        assert format_body(b"\xff\xfe") == "<binary data: 2 bytes>"

    def test_other(self):
        assert format_body(12) == "12"


class TestPrinting:
    """Tests for print_request and print_response."""

    # Decision: silent unless AICHAT_DEBUG=true
    def test_disabled(self, monkeypatch):
        monkeypatch.delenv("AICHAT_DEBUG", raising=False)
        with patch("aichat_client.debug.console") as console:
            print_request("GET", "https://x.io", {"Authorization": "Bearer secret-token-value"})
            print_response(200, "https://x.io", {})
        console.print.assert_not_called()

    def test_enabled_masks_headers(self, monkeypatch):
        monkeypatch.setenv("AICHAT_DEBUG", "true")
        with patch("aichat_client.debug.console") as console:
            print_request("POST", "https://x.io", {"Authorization": "Bearer secret-token-value"}, {"a": 1}, retries_remaining=2)
        printed = [call.args for call in console.print.call_args_list]
        assert ("[bold]Headers:[/bold]", {"Authorization": "Bearer secret-t***"}) in printed
        assert console.print.call_count == 3

    def test_response_without_body(self, monkeypatch):
        monkeypatch.setenv("AICHAT_DEBUG", "true")
        with patch("aichat_client.debug.console") as console:
            print_response(404, "https://x.io", {"x-a": "1"})
        assert console.print.call_count == 2
