"""Unit tests for structured request/response/error diagnostics."""

import logging

import pytest
from unittest.mock import Mock

from drama_client.errors import HttpFailure, TransportFailure
from drama_client.models.context import RequestContext
from drama_client.observability.logging import DiagnosticsLogger
from drama_client.transport.base import TransportResponse


pytestmark = pytest.mark.unit


@pytest.fixture
def diagnostics(fake_clock):
    return DiagnosticsLogger(clock=fake_clock)


@pytest.fixture
def context(fake_clock):
    return RequestContext(
        method="POST",
        url="/ai-configs",
        base_url="http://backend.test/api/v1",
        id="1700000000000-abcd1234",
        headers={"Content-Type": "application/json", "Authorization": "Bearer secret"},
        params={"token": "t", "page": 1},
        body={"name": "ark", "api_key": "sk-live"},
        retry_limit=0,
        started_at_ms=fake_clock(),
    )


class TestDiagnosticsLogger:

    def test_log_request(self, diagnostics, context, api_records):
        diagnostics.log_request(context)

        [record] = api_records("API Request")
        assert record.levelno == logging.INFO
        assert record.payload == {
            "request_id": "1700000000000-abcd1234",
            "url": "http://backend.test/api/v1/ai-configs",
            "method": "POST",
            "headers": {"Content-Type": "application/json", "Authorization": "***"},
            "params": {"token": "***", "page": 1},
            "data": {"name": "ark", "api_key": "***"},
        }
        assert "request_id=1700000000000-abcd1234" in record.getMessage()
        # Original context is untouched
        assert context.body["api_key"] == "sk-live"

    def test_log_response(self, diagnostics, context, fake_clock, api_records):
        fake_clock.advance(250)
        response = TransportResponse(
            status_code=200,
            headers={"Set-Cookie": "sid=1", "Content-Type": "application/json"},
            data={"success": True, "data": {"id": 7, "api_key": "sk-live"}},
        )

        diagnostics.log_response(context, response)

        [record] = api_records("API Response")
        payload = record.payload
        assert payload["status"] == 200
        assert payload["duration"] == 250
        assert payload["headers"] == {"Set-Cookie": "***", "Content-Type": "application/json"}
        assert payload["data"] == {"success": True, "data": {"id": 7, "api_key": "***"}}

    def test_log_error_with_response(self, diagnostics, context, fake_clock, api_records):
        fake_clock.advance(40)
        response = TransportResponse(
            status_code=502,
            headers={"Cookie": "c"},
            data={"success": False, "error": {"message": "token expired", "token": "t"}},
        )
        error = HttpFailure("token expired", status_code=502)

        diagnostics.log_error(context, error, response)

        [record] = api_records("API Error")
        payload = record.payload
        assert record.levelno == logging.ERROR
        assert payload["status"] == 502
        assert payload["duration"] == 40
        assert payload["response_headers"] == {"Cookie": "***"}
        assert payload["response_data"]["error"] == {"message": "token expired", "token": "***"}
        # The error message is diagnostic text and is not redacted
        assert payload["message"] == "token expired"

    def test_log_error_without_response(self, diagnostics, context, api_records):
        diagnostics.log_error(context, TransportFailure("dial tcp: i/o timeout"))

        payload = api_records("API Error")[0].payload
        assert payload["status"] is None
        assert payload["message"] == "dial tcp: i/o timeout"
        assert "response_headers" not in payload
        assert "response_data" not in payload

    def test_log_error_without_context_omits_duration(self, diagnostics, api_records):
        diagnostics.log_error(None, RuntimeError("boom"))

        payload = api_records("API Error")[0].payload
        assert "duration" not in payload
        assert payload["request_id"] is None
        assert payload["message"] == "boom"

    def test_duration_counts_from_first_attempt(self, diagnostics, context, fake_clock, api_records):
        retried = context.evolve(retry_limit=2).next_attempt().next_attempt()
        fake_clock.advance(900)

        diagnostics.log_response(retried, TransportResponse(status_code=200, data=None))

        assert api_records("API Response")[0].payload["duration"] == 900

    def test_emission_failure_never_raises(self, context):
        diagnostics = DiagnosticsLogger()
        diagnostics.logger = Mock()
        diagnostics.logger.log.side_effect = RuntimeError("handler broke")

        diagnostics.log_request(context)
        diagnostics.log_error(context, RuntimeError("x"))
