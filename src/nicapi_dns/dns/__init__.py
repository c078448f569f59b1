"""DNS provider factory — build the NicAPI challenge provider from configuration."""

from __future__ import annotations

from nicapi_dns.config import AppConfig
from nicapi_dns.dns.base import ChallengeProvider
from nicapi_dns.dns.nicapi import NicApiDnsProvider


def get_dns_provider(config: AppConfig) -> ChallengeProvider:
    """Instantiate the NicAPI DNS provider.

    Args:
        config: Application configuration.

    Returns:
        A configured ChallengeProvider instance.
    """
    return NicApiDnsProvider(
        api_key=config.api_key,
        nameservers=config.nameservers,
        cleanup_match_value=config.cleanup_match_value,
        base_url=config.api_url,
        timeout=config.timeout_seconds,
    )
