"""Unit tests for the request dispatcher: retry on rate limiting and error normalization"""

import json
import unittest
from unittest.mock import MagicMock, patch

import requests
from requests import Response

from histori_client.client import HistoriClient
from histori_client.models import FALLBACK_ERROR_MESSAGE, HistoriError
from histori_client.types import RequestOptions

ROUTE = "/v1/eth-mainnet/chain/block-height"


def _response(status: int, payload=None, text: str = "") -> Response:
    """Build a real requests.Response so raise_for_status/json behave as in production"""
    response = Response()
    response.status_code = status
    response._content = (json.dumps(payload) if payload is not None else text).encode()
    response.url = f"https://api.histori.xyz{ROUTE}"
    return response


@patch("histori_client.api.base.time.sleep")
class TestDispatcherRetry(unittest.TestCase):
    def setUp(self) -> None:
        self.client = HistoriClient(api_key="histori_testkey123", max_retries=3)
        self.client.http = MagicMock()
        self.success = {"network_name": "eth-mainnet", "chain_id": 1, "block_height": 21021031}

    def test_success_first_attempt(self, sleep):
        self.client.http.get.return_value = _response(200, self.success)

        result = self.client.get(ROUTE)

        assert result == self.success
        self.client.http.get.assert_called_once_with(
            url=f"https://api.histori.xyz{ROUTE}",
            headers=self.client.default_headers(),
            timeout=self.client.config.request_timeout,
        )
        sleep.assert_not_called()

    def test_api_key_header(self, _sleep):
        headers = self.client.default_headers()
        assert headers["x-api-key"] == "histori_testkey123"
        assert headers["User-Agent"].startswith("histori-client/")

    def test_retries_rate_limited_then_succeeds(self, sleep):
        self.client.http.get.side_effect = [
            _response(429, {"message": "Too Many Requests"}),
            _response(429, {"message": "Too Many Requests"}),
            _response(200, self.success),
        ]

        result = self.client.get(ROUTE)

        assert result == self.success
        assert self.client.http.get.call_count == 3
        assert sleep.call_count == 2
        sleep.assert_called_with(2.0)

    def test_retry_budget_exhausted(self, sleep):
        self.client.http.get.return_value = _response(
            429, {"statusCode": 429, "message": "Rate limit exceeded", "error": "Too Many Requests"}
        )

        with self.assertRaises(HistoriError) as ctx:
            self.client.get(ROUTE)

        # max_retries + 1 attempts in total
        assert self.client.http.get.call_count == 4
        assert sleep.call_count == 3
        assert ctx.exception.status == 429
        assert ctx.exception.message == "Rate limit exceeded"
        assert ctx.exception.error_kind == "Too Many Requests"

    def test_non_rate_limit_error_is_not_retried(self, sleep):
        self.client.http.get.return_value = _response(
            404, {"statusCode": 404, "message": "Block not found", "error": "Not Found"}
        )

        with self.assertRaises(HistoriError) as ctx:
            self.client.get(ROUTE)

        assert self.client.http.get.call_count == 1
        sleep.assert_not_called()
        assert ctx.exception.status == 404
        assert ctx.exception.message == "Block not found"
        assert ctx.exception.error_kind == "Not Found"

    def test_server_error_is_not_retried(self, sleep):
        self.client.http.get.return_value = _response(503, text="Service Unavailable")

        with self.assertRaises(HistoriError) as ctx:
            self.client.get(ROUTE)

        assert self.client.http.get.call_count == 1
        sleep.assert_not_called()
        assert ctx.exception.status == 503
        assert ctx.exception.error_kind == "Network Error"
        assert ctx.exception.message

    def test_retry_disabled(self, sleep):
        self.client.http.get.return_value = _response(429, {"message": "slow down"})

        with self.assertRaises(HistoriError) as ctx:
            self.client.get(ROUTE, RequestOptions(enable_retry=False))

        assert self.client.http.get.call_count == 1
        sleep.assert_not_called()
        assert ctx.exception.status == 429

    def test_per_call_retry_overrides(self, sleep):
        self.client.http.get.return_value = _response(429, {"message": "slow down"})

        with self.assertRaises(HistoriError):
            self.client.get(ROUTE, RequestOptions(max_retries=1, retry_delay_ms=500))

        assert self.client.http.get.call_count == 2
        sleep.assert_called_once_with(0.5)
        # The configured budget is untouched by the call
        assert self.client.config.max_retries == 3

    def test_budget_is_fresh_for_every_call(self, _sleep):
        self.client.http.get.side_effect = [
            _response(429, {}),
            _response(200, self.success),
            _response(429, {}),
            _response(429, {}),
            _response(200, self.success),
        ]

        assert self.client.get(ROUTE) == self.success
        assert self.client.get(ROUTE) == self.success
        assert self.client.http.get.call_count == 5

    def test_retry_with_zero_budget(self, sleep):
        client = HistoriClient(api_key="histori_testkey123", max_retries=0)
        client.http = MagicMock()
        client.http.get.return_value = _response(429, {})

        with self.assertRaises(HistoriError):
            client.get(ROUTE)

        assert client.http.get.call_count == 1
        sleep.assert_not_called()


class TestErrorNormalization(unittest.TestCase):
    def setUp(self) -> None:
        self.client = HistoriClient(api_key="histori_testkey123")
        self.client.http = MagicMock()

    def test_transport_failure(self):
        self.client.http.get.side_effect = requests.ConnectionError("connection refused")

        with self.assertRaises(HistoriError) as ctx:
            self.client.get(ROUTE)

        assert ctx.exception.status == 500
        assert ctx.exception.message == "connection refused"
        assert ctx.exception.error_kind == "Network Error"
        assert isinstance(ctx.exception.__cause__, requests.ConnectionError)

    def test_transport_failure_without_message(self):
        self.client.http.get.side_effect = requests.Timeout()

        with self.assertRaises(HistoriError) as ctx:
            self.client.get(ROUTE)

        assert ctx.exception.status == 500
        assert ctx.exception.message == FALLBACK_ERROR_MESSAGE

    def test_validation_messages_are_joined(self):
        self.client.http.get.return_value = _response(
            400,
            {
                "statusCode": 400,
                "message": ["holder must be an address", "token_address must be an address"],
                "error": "Bad Request",
            },
        )

        with self.assertRaises(HistoriError) as ctx:
            self.client.get(ROUTE)

        assert ctx.exception.status == 400
        assert ctx.exception.message == (
            "holder must be an address; token_address must be an address"
        )
        assert ctx.exception.error_kind == "Bad Request"

    def test_undecodable_success_body(self):
        self.client.http.get.return_value = _response(200, text="<html>gateway</html>")

        with self.assertRaises(HistoriError) as ctx:
            self.client.get(ROUTE)

        assert ctx.exception.status == 500
        assert ctx.exception.error_kind == "Network Error"

    def test_error_string(self):
        err = HistoriError(message="Block not found", status=404, error_kind="Not Found")
        assert str(err) == "Not Found (404): Block not found"


class TestDebugLogging(unittest.TestCase):
    def setUp(self) -> None:
        self.client = HistoriClient(api_key="histori_testkey123")
        self.client.http = MagicMock()

    def test_no_diagnostics_without_debug(self):
        self.client.http.get.return_value = _response(200, {"ok": True})
        with self.assertNoLogs("histori_client.api.base", level="INFO"):
            self.client.get(ROUTE)

    def test_success_diagnostics(self):
        self.client.http.get.return_value = _response(200, {"ok": True})
        with self.assertLogs("histori_client.api.base", level="INFO") as logs:
            self.client.get(ROUTE, RequestOptions(debug=True))
        assert any(ROUTE in line and "status=200" in line for line in logs.output)

    @patch("histori_client.api.base.time.sleep")
    def test_retry_and_failure_diagnostics(self, _sleep):
        self.client.http.get.return_value = _response(429, {"message": "slow down"})
        with self.assertLogs("histori_client.api.base", level="INFO") as logs:
            with self.assertRaises(HistoriError):
                self.client.get(ROUTE, RequestOptions(debug=True, max_retries=1))
        assert logs.output[0].startswith("WARNING")
        assert logs.output[-1].startswith("ERROR")


if __name__ == "__main__":
    unittest.main()
