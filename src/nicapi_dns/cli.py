"""nicapi-dns CLI — certbot manual hooks for NicAPI DNS-01 challenges.

Usage examples::

    certbot certonly --manual --preferred-challenges dns \\
        --manual-auth-hook "nicapi-dns present" \\
        --manual-cleanup-hook "nicapi-dns cleanup" -d example.com

    nicapi-dns present --domain example.com --value abc123
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from nicapi_dns.config import load_config
from nicapi_dns.dns import get_dns_provider
from nicapi_dns.errors import MissingCredentialError, NicApiDnsError

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def challenge_fqdn(domain: str) -> str:
    """Return the DNS-01 record name for ``domain`` (wildcards share the base name)."""
    return f"_acme-challenge.{domain.removeprefix('*.').rstrip('.')}."


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="nicapi-dns",
        description="Publish or remove ACME DNS-01 TXT records through NicAPI",
    )
    parser.add_argument(
        "operation",
        choices=["present", "cleanup"],
        help="Publish the challenge record or remove it",
    )
    parser.add_argument(
        "--domain", "-d",
        default=os.environ.get("CERTBOT_DOMAIN"),
        help="Domain being validated (default: $CERTBOT_DOMAIN)",
    )
    parser.add_argument(
        "--value", "-v",
        default=os.environ.get("CERTBOT_VALIDATION"),
        help="TXT record value (default: $CERTBOT_VALIDATION)",
    )
    parser.add_argument(
        "--fqdn",
        help="Challenge record name (default: _acme-challenge.<domain>.)",
    )
    parser.add_argument(
        "--log-level",
        default=os.environ.get("NICAPI_LOG_LEVEL", "INFO"),
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: $NICAPI_LOG_LEVEL or INFO)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point. Returns the process exit code."""
    parser = _build_parser()
    ns = parser.parse_args(argv)
    logging.basicConfig(level=ns.log_level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)

    if not ns.domain or not ns.value:
        parser.error("--domain and --value are required (or set CERTBOT_DOMAIN and CERTBOT_VALIDATION)")
    fqdn = ns.fqdn or challenge_fqdn(ns.domain)

    try:
        config = load_config()
    except (MissingCredentialError, ValueError) as exc:
        logger.error("Invalid configuration: %s", exc)
        return EXIT_CONFIG

    try:
        with get_dns_provider(config) as provider:
            if ns.operation == "present":
                provider.present(ns.domain, fqdn, ns.value)
            else:
                provider.cleanup(ns.domain, fqdn, ns.value)
    except (NicApiDnsError, ValueError) as exc:
        logger.error("%s failed for %s: %s", ns.operation, fqdn, exc)
        return EXIT_FAILURE
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
