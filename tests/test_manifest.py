"""Tests for manifest.py."""

import httpx
import pytest

from manifest import REQUEST_TIMEOUT, ManifestFetcher, manifest_url

from conftest import BASE_URL, TOKEN


CORE_URL = f"{BASE_URL}/core.json"


class TestManifestUrl:
    """Tests for manifest_url()."""

    def test_adds_separator(self):
        assert manifest_url("https://example.com/repo", "core.json") == (
            "https://example.com/repo/core.json"
        )

    def test_keeps_single_separator(self):
        assert manifest_url("https://example.com/repo/", "core.json") == (
            "https://example.com/repo/core.json"
        )

    def test_collapses_repeated_separators(self):
        assert manifest_url("https://example.com/repo///", "themes.json") == (
            "https://example.com/repo/themes.json"
        )


class TestFetch:
    """Tests for ManifestFetcher.fetch()."""

    def test_fetch_success(self, httpx_mock, fetcher, core_manifest):
        """Successfully fetches and parses manifest JSON."""
        httpx_mock.add_response(url=CORE_URL, json=core_manifest)

        result = fetcher.fetch("core.json")

        assert result == core_manifest

    def test_sends_token_and_accept_headers(self, httpx_mock, fetcher):
        """Request carries bearer token and raw-content Accept header."""
        httpx_mock.add_response(url=CORE_URL, json={"current": "6.5"})

        fetcher.fetch("core.json")

        request = httpx_mock.get_request()
        assert request.method == "GET"
        assert request.headers["Authorization"] == f"Bearer {TOKEN}"
        assert request.headers["Accept"] == "application/vnd.github.v3.raw"

    def test_returns_list_unvalidated(self, httpx_mock, fetcher):
        """Non-object JSON is returned as-is."""
        httpx_mock.add_response(url=CORE_URL, json=["a", "b"])

        assert fetcher.fetch("core.json") == ["a", "b"]

    @pytest.mark.parametrize("status_code", [401, 404, 500])
    def test_http_error_returns_none(self, httpx_mock, fetcher, status_code):
        """Non-2xx responses are reported as None."""
        httpx_mock.add_response(url=CORE_URL, status_code=status_code)

        assert fetcher.fetch("core.json") is None

    def test_timeout_returns_none(self, httpx_mock, fetcher, caplog):
        """Timeouts are reported as None and logged."""
        httpx_mock.add_exception(
            httpx.TimeoutException("Connection timeout"),
            url=CORE_URL,
        )

        assert fetcher.fetch("core.json") is None
        assert "Error fetching" in caplog.text

    def test_invalid_json_returns_none(self, httpx_mock, fetcher, caplog):
        """Unparseable body is reported as None."""
        httpx_mock.add_response(url=CORE_URL, text="<html>not json</html>")

        assert fetcher.fetch("core.json") is None
        assert "Invalid JSON" in caplog.text

    @pytest.mark.parametrize(
        "base_url, token",
        [("", TOKEN), (BASE_URL, ""), ("", "")],
    )
    def test_missing_config_skips_request(self, httpx_mock, base_url, token):
        """No request is made without both base URL and token."""
        fetcher = ManifestFetcher(base_url, token)

        assert fetcher.is_configured is False
        assert fetcher.fetch("core.json") is None
        assert httpx_mock.get_requests() == []

    def test_uses_fixed_timeout(self, fetcher, monkeypatch):
        """Requests use the fixed 15 second timeout."""
        calls = []

        def fake_get(url, **kwargs):
            calls.append(kwargs)
            raise httpx.ConnectError("refused")

        monkeypatch.setattr("manifest.httpx.get", fake_get)

        assert fetcher.fetch("core.json") is None
        assert calls[0]["timeout"] == REQUEST_TIMEOUT == 15.0

    @pytest.mark.parametrize(
        "base_url",
        ["https://ex.com:abc/repo", "https://ex.com/re\x00po"],
    )
    def test_invalid_base_url_returns_none(self, httpx_mock, base_url, caplog):
        """A URL httpx cannot parse is reported as None, not raised."""
        fetcher = ManifestFetcher(base_url, TOKEN)

        assert fetcher.fetch("core.json") is None
        assert httpx_mock.get_requests() == []
        assert "Invalid repository URL" in caplog.text

    def test_non_ascii_token_skips_request(self, httpx_mock, caplog):
        """A token that cannot be sent as a header is reported as None."""
        fetcher = ManifestFetcher(BASE_URL, "tökén")

        assert fetcher.fetch("core.json") is None
        assert httpx_mock.get_requests() == []
        assert "non-ASCII" in caplog.text
        assert "Invalid JSON" not in caplog.text
