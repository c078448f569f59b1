"""Authoritative zone discovery via dnspython."""

from __future__ import annotations

import logging
from collections.abc import Sequence

import dns.exception
import dns.resolver

from nicapi_dns.errors import ZoneLookupError

logger = logging.getLogger(__name__)

_DNS_PORT = 53


def _split_nameserver(address: str) -> tuple[str, int]:
    """Split ``host``, ``host:port`` or ``[v6]:port`` into host and port."""
    address = address.strip()
    if address.startswith("["):
        host, _, rest = address[1:].partition("]")
        port = rest.removeprefix(":")
        return host, int(port) if port else _DNS_PORT
    if address.count(":") == 1:
        host, port = address.split(":")
        return host, int(port)
    return address, _DNS_PORT


def build_resolver(nameservers: Sequence[str]) -> dns.resolver.Resolver:
    """Create a resolver that queries only ``nameservers``.

    An empty sequence falls back to the system resolver configuration.
    """
    if not nameservers:
        return dns.resolver.Resolver()
    resolver = dns.resolver.Resolver(configure=False)
    hosts = []
    for address in nameservers:
        host, port = _split_nameserver(address)
        hosts.append(host)
        if port != _DNS_PORT:
            resolver.nameserver_ports[host] = port
    resolver.nameservers = hosts
    return resolver


def find_zone_by_fqdn(fqdn: str, nameservers: Sequence[str]) -> str:
    """Find the authoritative zone for ``fqdn`` by walking up its labels.

    Args:
        fqdn: Name to look up, e.g. ``"_acme-challenge.sub.example.com."``.
        nameservers: Recursive nameservers as ``host`` or ``host:port``.

    Returns:
        The zone name with a trailing dot, e.g. ``"example.com."``.

    Raises:
        ZoneLookupError: No authoritative zone could be determined.
    """
    try:
        resolver = build_resolver(nameservers)
        zone = dns.resolver.zone_for_name(fqdn, resolver=resolver)
    except (dns.exception.DNSException, ValueError) as exc:
        raise ZoneLookupError(f"Could not find the authoritative zone for '{fqdn}': {exc}") from exc
    logger.debug("Authoritative zone for %s is %s", fqdn, zone)
    return zone.to_text()
