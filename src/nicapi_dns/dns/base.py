"""Abstract base class for DNS-01 challenge providers."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Self


class ChallengeProvider(ABC):
    """Interface an ACME client uses to publish and remove DNS-01 TXT records."""

    def close(self) -> None:
        """Release resources. Override in subclasses that hold open connections."""

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    @abstractmethod
    def present(self, domain: str, fqdn: str, value: str) -> None:
        """Publish the TXT record for a DNS-01 challenge.

        Args:
            domain: Domain being validated (e.g. "example.com").
            fqdn: Fully qualified challenge record name (e.g. "_acme-challenge.example.com.").
            value: TXT record value (the ACME key authorization digest).
        """

    @abstractmethod
    def cleanup(self, domain: str, fqdn: str, value: str) -> None:
        """Remove the TXT record once the challenge has been validated.

        Args:
            domain: Domain being validated (e.g. "example.com").
            fqdn: Fully qualified challenge record name (e.g. "_acme-challenge.example.com.").
            value: TXT record value that was published.
        """
