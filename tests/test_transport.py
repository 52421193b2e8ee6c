"""
Tests for the Addy HTTP client.
"""

import pytest
import requests

from addyverify.errors import ConfigurationError
from addyverify.transport import AddyClient


class FakeResponse:
    def __init__(self, status_code=200, reason="OK", text="{}"):
        self.status_code = status_code
        self.reason = reason
        self.text = text


@pytest.fixture
def client():
    return AddyClient("key123", "secret456", timeout=5)


class TestBuildRequest:
    """Test request construction."""

    def test_url_params_and_headers(self, client):
        url, params, headers = client.build_request("80A Queen Street Auckland 1010")

        assert url == "https://api.addy.co.nz/validation"
        assert params == {
            "address": "80A Queen Street Auckland 1010",
            "key": "key123",
            "secret": "secret456",
        }
        assert headers == {"Accept": "application/json"}

    def test_base_url_without_trailing_slash(self):
        client = AddyClient("k", "s", base_url="http://localhost:8080")
        url, _, _ = client.build_request("x")
        assert url == "http://localhost:8080/validation"

    def test_missing_credentials(self):
        with pytest.raises(ConfigurationError, match="ADDY_API_KEY"):
            AddyClient("", "secret")
        with pytest.raises(ConfigurationError, match="ADDY_API_SECRET"):
            AddyClient("key", "")


class TestValidate:
    """Test validate() with requests.get replaced."""

    def test_success(self, client, monkeypatch):
        calls = []

        def fake_get(url, params=None, headers=None, timeout=None):
            calls.append((url, params, headers, timeout))
            return FakeResponse(200, "OK", '{"reason": "Exact match"}')

        monkeypatch.setattr(requests, "get", fake_get)

        result = client.validate("1 Main Road")

        assert result.ok
        assert result.status_code == 200
        assert result.body == '{"reason": "Exact match"}'
        assert calls[0][0] == "https://api.addy.co.nz/validation"
        assert calls[0][1]["address"] == "1 Main Road"
        assert calls[0][3] == 5

    def test_error_status(self, client, monkeypatch):
        monkeypatch.setattr(
            requests, "get", lambda *a, **kw: FakeResponse(503, "Service Unavailable", "")
        )

        result = client.validate("1 Main Road")

        assert not result.ok
        assert result.status_description == "Service Unavailable"

    def test_timeout_becomes_status_zero(self, client, monkeypatch):
        def fake_get(*args, **kwargs):
            raise requests.exceptions.Timeout("read timed out")

        monkeypatch.setattr(requests, "get", fake_get)

        result = client.validate("1 Main Road")

        assert result.status_code == 0
        assert not result.ok
        assert "timed out" in result.status_description

    def test_connection_error_becomes_status_zero(self, client, monkeypatch):
        def fake_get(*args, **kwargs):
            raise requests.exceptions.ConnectionError("Connection refused")

        monkeypatch.setattr(requests, "get", fake_get)

        result = client.validate("1 Main Road")

        assert result.status_code == 0
        assert "Connection refused" in result.status_description
