"""Exception hierarchy for the NicAPI DNS-01 provider.

Every failure raised by this package inherits from :class:`NicApiDnsError`
so callers can catch the whole family with one clause.
"""

from __future__ import annotations


class NicApiDnsError(Exception):
    """Root exception for all NicAPI DNS provider errors."""


class MissingCredentialError(NicApiDnsError, ValueError):
    """The API key is absent or empty."""


class ZoneLookupError(NicApiDnsError):
    """No authoritative zone could be found for a name."""


class TransportError(NicApiDnsError):
    """The API could not be reached (connection failure, timeout)."""


class DecodeError(NicApiDnsError):
    """The API returned a body that is not a valid response envelope."""


class APIError(NicApiDnsError):
    """The API answered with a status other than ``success``."""

    def __init__(self, message: str, errors=(), server_transaction_id: str | None = None) -> None:
        super().__init__(message)
        self.errors = tuple(errors)
        self.server_transaction_id = server_transaction_id
