"""
Unit tests for the Client transport boundary.
"""

import json
import logging

import pytest

from httpmessage import Client, InvalidArgumentError, MessageConfig, Request, RequestLog


@pytest.fixture
def sample_request() -> Request:
    """Request used by the client tests."""
    return Request("https://api.example.com/users?page=2", "get")


class RecordingTransport:
    """Transport that remembers what it was given."""

    def __init__(self, response="response"):
        self.response = response
        self.requests = []

    def __call__(self, request):
        self.requests.append(request)
        return self.response


class TestClient:
    """Tests for Client.send()."""

    def test_send_returns_transport_result(self, sample_request: Request):
        """Test that the transport result is returned unchanged."""
        transport = RecordingTransport(response={"status": 200})

        result = Client(transport).send(sample_request)

        assert result == {"status": 200}
        assert transport.requests == [sample_request]

    def test_send_bound_request(self, sample_request: Request):
        """Test that a request bound at construction is used."""
        transport = RecordingTransport()

        Client(transport, request=sample_request).send()

        assert transport.requests[0] is sample_request

    def test_explicit_request_wins(self, sample_request: Request):
        """Test that send(request) overrides the bound request."""
        transport = RecordingTransport()
        other = Request("http://example.com/", "HEAD")

        Client(transport, request=sample_request).send(other)

        assert transport.requests[0] is other

    def test_send_without_request(self):
        """Test that sending nothing fails."""
        with pytest.raises(InvalidArgumentError):
            Client(RecordingTransport()).send()

    def test_send_non_request(self):
        """Test that only Requests can be sent."""
        with pytest.raises(InvalidArgumentError):
            Client(RecordingTransport()).send("GET / HTTP/1.1")

    def test_invalid_construction(self):
        """Test constructor validation."""
        with pytest.raises(InvalidArgumentError):
            Client("not callable")
        with pytest.raises(InvalidArgumentError):
            Client(RecordingTransport(), request="GET /")
        with pytest.raises(InvalidArgumentError):
            Client(RecordingTransport(), log_format="xml")


class TestClientLogging:
    """Tests for access logging."""

    def test_text_log(self, sample_request: Request, caplog):
        """Test the text access line."""
        with caplog.at_level(logging.DEBUG, logger="httpmessage.access"):
            Client(RecordingTransport()).send(sample_request)

        records = [r for r in caplog.records if r.name == "httpmessage.access"]
        assert len(records) == 1
        assert records[0].levelno == logging.DEBUG
        assert "GET /users?page=2 HTTP/1.1 host=api.example.com" in records[0].getMessage()

    def test_json_log(self, sample_request: Request, caplog):
        """Test the JSON access line."""
        with caplog.at_level(logging.DEBUG, logger="httpmessage.access"):
            Client(RecordingTransport(), log_format="json").send(sample_request)

        entry = json.loads(caplog.records[-1].getMessage())
        assert entry["method"] == "GET"
        assert entry["target"] == "/users?page=2"
        assert entry["host"] == "api.example.com"
        assert len(entry["request_id"]) == 8

    def test_access_log_level_from_config(self, sample_request: Request, caplog):
        """Test that config.access_log_level is used."""
        config = MessageConfig(access_log_level="WARNING")

        with caplog.at_level(logging.DEBUG, logger="httpmessage.access"):
            Client(RecordingTransport(), config=config).send(sample_request)

        assert caplog.records[-1].levelno == logging.WARNING

    def test_transport_error_logged_and_raised(self, sample_request: Request, caplog):
        """Test that transport failures propagate after logging."""

        def broken(request):
            raise ConnectionError("connection refused")

        with caplog.at_level(logging.DEBUG, logger="httpmessage.access"):
            with pytest.raises(ConnectionError):
                Client(broken).send(sample_request)

        record = caplog.records[-1]
        assert record.levelno == logging.ERROR
        assert "ConnectionError: connection refused" in record.getMessage()


class TestRequestLog:
    """Tests for RequestLog rendering."""

    def test_to_dict(self):
        """Test the structured form."""
        entry = RequestLog(
            request_id="a1b2c3d4",
            method="GET",
            target="/",
            host="-",
            protocol_version="1.1",
            duration_ms=1.23456,
            timestamp="19/Oct/2026:10:00:00 +0000",
        )

        assert entry.to_dict()["duration_ms"] == 1.23
        assert entry.to_dict()["host"] == "-"

    def test_to_text_without_method(self):
        """Test that a missing method renders as a dash."""
        entry = RequestLog(
            request_id="a1b2c3d4",
            method="",
            target="*",
            host="example.com",
            protocol_version="1.0",
            duration_ms=0.5,
            timestamp="19/Oct/2026:10:00:00 +0000",
        )

        assert entry.to_text() == "[a1b2c3d4] - * HTTP/1.0 host=example.com 0.50ms"
