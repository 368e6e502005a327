"""
Tests for curl command rendering.
"""

from src.quickfire.core.transport import WireRequest
from src.quickfire.utils.curl import to_curl


class TestToCurl:
    def test_get(self):
        request = WireRequest("GET", "https://api.example.com/x/?q=a%20b", {"Accept": "*/*"})

        assert to_curl(request) == "curl -X GET -H 'Accept: */*' 'https://api.example.com/x/?q=a%20b'"

    def test_post_body(self):
        request = WireRequest(
            "POST", "https://api.example.com/login/",
            {"Content-Type": "application/x-www-form-urlencoded"},
            body=b"user=alice",
        )

        command = to_curl(request)

        assert "-d user=alice" in command
        assert command.startswith("curl -X POST")

    def test_masks_headers_and_body(self):
        request = WireRequest(
            "POST", "https://api.example.com/login/",
            {"Authorization": "Bearer abc"},
            body=b"user=alice&password=hunter2",
        )

        command = to_curl(request)

        assert "Bearer abc" not in command
        assert "hunter2" not in command

    def test_binary_body_summarized(self):
        request = WireRequest("PUT", "https://api.example.com/avatar/", body=b"\xff\xd8\xff")

        assert "--data-binary '<3 bytes>'" in to_curl(request)

    def test_body_override(self):
        request = WireRequest("POST", "https://api.example.com/x/")

        assert "-d a=b" in to_curl(request, body=b"a=b")
