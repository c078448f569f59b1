"""NicAPI DNS provider — publish/remove DNS-01 TXT records via the Lumaserv NicAPI."""

from __future__ import annotations

import logging
import os
from collections.abc import Callable, Sequence

from nicapi_dns.api import API_BASE, DEFAULT_TIMEOUT, NicApiClient
from nicapi_dns.config import API_KEY_ENV
from nicapi_dns.dns.base import ChallengeProvider
from nicapi_dns.dns.resolver import find_zone_by_fqdn
from nicapi_dns.dns.util import TXT, find_txt_record, relative_record_name, un_fqdn
from nicapi_dns.errors import MissingCredentialError
from nicapi_dns.models import Record, RecordMutationRequest, Zone

logger = logging.getLogger(__name__)

_ZONE_SHOW = "/dns/zones/show"
_RECORDS_ADD = "/dns/zones/records/add"
_RECORDS_DELETE = "/dns/zones/records/delete"
_CHALLENGE_TTL = 120 * 60

ZoneLocator = Callable[[str, Sequence[str]], str]


class NicApiDnsProvider(ChallengeProvider):
    """DNS-01 challenge provider backed by NicAPI zones."""

    def __init__(
        self,
        api_key: str | None,
        nameservers: Sequence[str],
        *,
        cleanup_match_value: bool = True,
        base_url: str = API_BASE,
        timeout: float = DEFAULT_TIMEOUT,
        _api_client: NicApiClient | None = None,
        _zone_locator: ZoneLocator | None = None,
    ) -> None:
        if not api_key:
            raise MissingCredentialError("credentials missing")
        self._nameservers = tuple(nameservers)
        self._cleanup_match_value = cleanup_match_value
        self._api = _api_client or NicApiClient(api_key, base_url=base_url, timeout=timeout)
        self._find_zone = _zone_locator or find_zone_by_fqdn

    @classmethod
    def from_env(cls, nameservers: Sequence[str], **kwargs) -> NicApiDnsProvider:
        """Build a provider using the API key from ``LUMASERV_API_KEY``."""
        return cls(os.environ.get(API_KEY_ENV), nameservers, **kwargs)

    def _get_hosted_zone(self, fqdn: str) -> Zone:
        """Resolve the authoritative zone for ``fqdn`` and fetch its records."""
        auth_zone = self._find_zone(fqdn, self._nameservers)
        payload = self._api.request("GET", _ZONE_SHOW, {"zone": un_fqdn(auth_zone)})
        return Zone.from_payload(payload)

    def _delete_record(self, zone: Zone, record_name: str) -> None:
        request = RecordMutationRequest(zone=zone.name, records=(Record(name=record_name),), target_only=True)
        self._api.request("POST", _RECORDS_DELETE, request.to_dict())
        logger.info("Deleted TXT record %s in NicAPI zone %s", record_name, zone.name)

    def present(self, domain: str, fqdn: str, value: str) -> None:
        zone = self._get_hosted_zone(fqdn)
        record_name = relative_record_name(fqdn, zone.name)
        existing = find_txt_record(zone.records, record_name)

        if existing is not None:
            if existing.data == value:
                logger.info("TXT record %s in zone %s already up to date", record_name, zone.name)
                return
            # NicAPI has no update endpoint, records are replaced by delete + add.
            self._delete_record(zone, record_name)

        record = Record(name=record_name, type=TXT, data=value, ttl=str(_CHALLENGE_TTL))
        request = RecordMutationRequest(zone=zone.name, records=(record,))
        self._api.request("POST", _RECORDS_ADD, request.to_dict())
        logger.info("Created TXT record %s in NicAPI zone %s", record_name, zone.name)

    def cleanup(self, domain: str, fqdn: str, value: str) -> None:
        zone = self._get_hosted_zone(fqdn)
        record_name = relative_record_name(fqdn, zone.name)
        existing = find_txt_record(zone.records, record_name)

        if existing is None:
            logger.info("TXT record %s not found in NicAPI zone %s, skipping delete", record_name, zone.name)
            return
        if self._cleanup_match_value and existing.data != value:
            logger.warning(
                "TXT record %s in zone %s holds a different value, leaving it in place",
                record_name,
                zone.name,
            )
            return
        self._delete_record(zone, record_name)

    def close(self) -> None:
        """Close the underlying API client."""
        self._api.close()
