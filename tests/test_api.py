"""Tests for the NicAPI REST client."""

import json
import logging
from unittest.mock import MagicMock, patch

import httpx
import pytest

from nicapi_dns.api import API_BASE, NicApiClient, RedactAuthTokenFilter
from nicapi_dns.errors import APIError, DecodeError, TransportError


def _response(payload, status_code=200):
    return MagicMock(status_code=status_code, json=MagicMock(return_value=payload))


def _envelope(status="success", data=None, errors=(), warnings=(), transaction="srv-1"):
    return {
        "metadata": {"clientTransactionId": "cli-1", "serverTransactionId": transaction},
        "messages": {"errors": list(errors), "warnings": list(warnings), "success": []},
        "status": status,
        "data": data,
    }


class TestNicApiClientRequest:
    def test_returns_data_payload(self):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(_envelope(data={"zone": {"id": 1}}))
        api = NicApiClient(api_key="key", _http_client=mock_client)

        result = api.request("GET", "/dns/zones/show", '{"zone": "example.com"}')

        assert result == {"zone": {"id": 1}}
        mock_client.request.assert_called_once_with(
            "GET", "/dns/zones/show", content='{"zone": "example.com"}'
        )

    def test_serializes_dict_body(self):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(_envelope())
        api = NicApiClient(api_key="key", _http_client=mock_client)

        api.request("POST", "/dns/zones/records/delete", {"zone": "example.com", "records": [{"name": "x"}]})

        body = mock_client.request.call_args.kwargs["content"]
        assert json.loads(body) == {"zone": "example.com", "records": [{"name": "x"}]}

    def test_empty_body_defaults_to_empty_object(self):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(_envelope())
        api = NicApiClient(api_key="key", _http_client=mock_client)

        api.request("GET", "/dns/zones/list")

        assert mock_client.request.call_args.kwargs["content"] == "{}"

    def test_api_error_includes_codes_and_messages(self):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(
            _envelope(status="error", errors=[{"code": 1001, "message": "invalid zone"}], transaction="srv-9")
        )
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with pytest.raises(APIError) as excinfo:
            api.request("GET", "/dns/zones/show", "{}")

        assert "1001" in str(excinfo.value)
        assert "invalid zone" in str(excinfo.value)
        assert excinfo.value.server_transaction_id == "srv-9"
        assert excinfo.value.errors[0].code == 1001

    def test_api_error_concatenates_all_errors(self):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(
            _envelope(
                status="error",
                errors=[{"code": 1001, "message": "invalid zone"}, {"code": 1002, "message": "denied"}],
            )
        )
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with pytest.raises(APIError, match="1001: invalid zone") as excinfo:
            api.request("GET", "/dns/zones/show", "{}")
        assert "1002: denied" in str(excinfo.value)

    def test_generic_api_error_without_messages(self):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(_envelope(status="error"))
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with pytest.raises(APIError, match="^API error$"):
            api.request("GET", "/dns/zones/show", "{}")

    def test_transport_error_is_wrapped(self):
        mock_client = MagicMock()
        cause = httpx.ConnectTimeout("timed out")
        mock_client.request.side_effect = cause
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with pytest.raises(TransportError, match="error querying API") as excinfo:
            api.request("GET", "/dns/zones/show", "{}")
        assert excinfo.value.__cause__ is cause

    @pytest.mark.parametrize(
        "cause",
        [httpx.TooManyRedirects("Exceeded maximum allowed redirects."), httpx.UnsupportedProtocol("ftp")],
    )
    def test_other_request_errors_are_wrapped(self, cause):
        mock_client = MagicMock()
        mock_client.request.side_effect = cause
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with pytest.raises(TransportError) as excinfo:
            api.request("GET", "/dns/zones/show", "{}")
        assert excinfo.value.__cause__ is cause

    def test_corrupt_body_encoding_raises_decode_error(self):
        mock_client = MagicMock()
        cause = httpx.DecodingError("Error -3 while decompressing data")
        mock_client.request.side_effect = cause
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with pytest.raises(DecodeError, match="decompressing") as excinfo:
            api.request("GET", "/dns/zones/show", "{}")
        assert excinfo.value.__cause__ is cause

    def test_invalid_json_raises_decode_error(self):
        mock_client = MagicMock()
        mock_client.request.return_value = MagicMock(
            status_code=502,
            json=MagicMock(side_effect=json.JSONDecodeError("Expecting value", "<html>", 0)),
        )
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with pytest.raises(DecodeError, match="HTTP 502"):
            api.request("GET", "/dns/zones/show", "{}")

    def test_non_object_json_raises_decode_error(self):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(["not", "an", "envelope"])
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with pytest.raises(DecodeError):
            api.request("GET", "/dns/zones/show", "{}")

    def test_logs_trace_without_token(self, caplog):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(_envelope(transaction="srv-42"))
        api = NicApiClient(api_key="super-secret", _http_client=mock_client)

        with caplog.at_level(logging.DEBUG, logger="nicapi_dns.api"):
            api.request("POST", "/dns/zones/records/add", '{"zone": "example.com"}')

        assert "POST /dns/zones/records/add" in caplog.text
        assert '{"zone": "example.com"}' in caplog.text
        assert "srv-42" in caplog.text
        assert "super-secret" not in caplog.text

    def test_logs_envelope_warnings(self, caplog):
        mock_client = MagicMock()
        mock_client.request.return_value = _response(
            _envelope(warnings=[{"code": 300, "message": "ttl adjusted"}])
        )
        api = NicApiClient(api_key="key", _http_client=mock_client)

        with caplog.at_level(logging.WARNING, logger="nicapi_dns.api"):
            api.request("POST", "/dns/zones/records/add", "{}")

        assert "300: ttl adjusted" in caplog.text


class TestNicApiClientConstruction:
    def test_client_authenticates_with_query_parameter(self):
        with patch("nicapi_dns.api.httpx.Client") as mock_cls:
            NicApiClient(api_key="my-secret-key")
            mock_cls.assert_called_once()
            kwargs = mock_cls.call_args.kwargs
            assert kwargs["params"] == {"authToken": "my-secret-key"}
            assert kwargs["base_url"] == API_BASE
            assert kwargs["timeout"] == 30
            assert kwargs["headers"]["Content-Type"] == "application/json"
            assert kwargs["headers"]["User-Agent"].startswith("nicapi-dns/")

    def test_wire_request_shape(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, json=_envelope(data={"ok": True}))

        http_client = httpx.Client(
            base_url=API_BASE,
            params={"authToken": "k-123"},
            headers={"Content-Type": "application/json"},
            transport=httpx.MockTransport(handler),
        )
        api = NicApiClient(api_key="k-123", _http_client=http_client)

        assert api.request("GET", "/dns/zones/show", '{"zone": "example.com"}') == {"ok": True}

        request = seen[0]
        assert request.method == "GET"
        assert request.url.path == "/api/v1/dns/zones/show"
        assert request.url.params["authToken"] == "k-123"
        assert json.loads(request.content) == {"zone": "example.com"}

    def test_close_closes_http_client(self):
        mock_client = MagicMock()
        api = NicApiClient(api_key="key", _http_client=mock_client)

        api.close()

        mock_client.close.assert_called_once()

    def test_context_manager_closes_http_client(self):
        mock_client = MagicMock()
        with NicApiClient(api_key="key", _http_client=mock_client):
            pass
        mock_client.close.assert_called_once()


class TestAuthTokenRedaction:
    def test_http_client_log_lines_mask_token(self, caplog):
        with patch.object(
            httpx.HTTPTransport,
            "handle_request",
            side_effect=lambda request: httpx.Response(200, json=_envelope(data={"ok": True})),
        ):
            with NicApiClient(api_key="TOPSECRET-KEY") as api, caplog.at_level(logging.DEBUG):
                api.request("GET", "/dns/zones/show", '{"zone": "example.com"}')

        httpx_lines = [r.getMessage() for r in caplog.records if r.name == "httpx"]
        assert any("authToken=***" in line for line in httpx_lines)
        assert "TOPSECRET-KEY" not in caplog.text

    def test_filter_masks_formatted_arguments(self):
        record = logging.LogRecord(
            "httpx", logging.INFO, __file__, 1,
            "HTTP Request: %s %s", ("GET", "https://x.test/a?zone=1&authToken=abc123&b=2"), None,
        )

        RedactAuthTokenFilter().filter(record)

        assert record.getMessage() == "HTTP Request: GET https://x.test/a?zone=1&authToken=***&b=2"
