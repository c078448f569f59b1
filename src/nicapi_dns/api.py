"""NicAPI REST client — authenticated requests and response envelope unwrapping."""

from __future__ import annotations

import json
import logging
import re
from importlib.metadata import PackageNotFoundError, version
from typing import Any, Self

import httpx

from nicapi_dns.errors import APIError, DecodeError, TransportError
from nicapi_dns.models import ApiEnvelope

logger = logging.getLogger(__name__)

API_BASE = "https://connect.nicapi.eu/api/v1"
DEFAULT_TIMEOUT = 30
_AUTH_TOKEN_RE = re.compile(r"(authToken=)[^&\s'\"]+")


def _package_version() -> str:
    try:
        return version("nicapi-dns")
    except PackageNotFoundError:
        return "0+unknown"


_USER_AGENT = f"nicapi-dns/{_package_version()}"


class RedactAuthTokenFilter(logging.Filter):
    """Mask the ``authToken`` query parameter in log records.

    httpx logs every request URL at INFO, and NicAPI authenticates through the
    query string.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        if "authToken=" in message:
            record.msg = _AUTH_TOKEN_RE.sub(r"\1***", message)
            record.args = ()
        return True


logging.getLogger("httpx").addFilter(RedactAuthTokenFilter())


def _format_api_error(envelope: ApiEnvelope) -> str:
    if not envelope.errors:
        return "API error"
    details = "".join(f"\n\tError: {err}" for err in envelope.errors)
    return f"API Error{details}"


class NicApiClient:
    """Thin wrapper over ``httpx.Client`` for the NicAPI JSON API.

    The API key travels as the ``authToken`` query parameter on every request,
    so request URLs are never logged in full.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        _http_client: httpx.Client | None = None,
    ) -> None:
        self._client = _http_client or httpx.Client(
            base_url=base_url,
            params={"authToken": api_key},
            headers={"User-Agent": _USER_AGENT, "Content-Type": "application/json"},
            timeout=timeout,
        )

    def request(self, method: str, path: str, body: str | dict | None = None) -> Any:
        """Perform one API call and return the envelope's ``data`` payload.

        Args:
            method: HTTP verb, e.g. ``"GET"``.
            path: Path relative to the API base URL, e.g. ``"/dns/zones/show"``.
            body: Pre-serialized JSON string, or a dict to serialize. Defaults to ``{}``.

        Raises:
            TransportError: The request did not complete (connection error, timeout).
            DecodeError: The response is not a JSON envelope.
            APIError: The envelope status is not ``success``.
        """
        if body is None:
            body = "{}"
        elif not isinstance(body, str):
            body = json.dumps(body)

        logger.debug("HTTP request: %s %s", method, path)
        logger.debug("HTTP body: %s", body)

        try:
            resp = self._client.request(method, path, content=body)
        except httpx.DecodingError as exc:
            raise DecodeError(f"Could not decode API response body: {exc}") from exc
        except httpx.RequestError as exc:
            raise TransportError(f"error querying API -> {exc}") from exc

        try:
            raw = resp.json()
        except ValueError as exc:
            raise DecodeError(
                f"Could not decode API response (HTTP {resp.status_code}): {exc}"
            ) from exc

        envelope = ApiEnvelope.from_dict(raw)
        logger.debug("HTTP transaction: %s", envelope.server_transaction_id)
        for warning in envelope.warnings:
            logger.warning("NicAPI warning for %s %s: %s", method, path, warning)

        if not envelope.ok:
            raise APIError(
                _format_api_error(envelope),
                errors=envelope.errors,
                server_transaction_id=envelope.server_transaction_id,
            )
        return envelope.data

    def close(self) -> None:
        """Close the underlying HTTP client."""
        self._client.close()

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()
