"""DNS name helpers and record lookup."""

from __future__ import annotations

from collections.abc import Iterable

from nicapi_dns.models import Record

TXT = "TXT"


def un_fqdn(name: str) -> str:
    """Strip a single trailing dot from a fully qualified name."""
    return name.removesuffix(".")


def relative_record_name(fqdn: str, zone: str) -> str:
    """Return the record name of ``fqdn`` relative to ``zone``.

    Both arguments may carry a trailing dot. For example
    ``relative_record_name("_acme-challenge.example.com.", "example.com")``
    returns ``"_acme-challenge"``.

    Raises:
        ValueError: ``fqdn`` is not strictly below ``zone``.
    """
    name = un_fqdn(fqdn)
    zone = un_fqdn(zone)
    suffix = f".{zone}"
    if not name.endswith(suffix):
        raise ValueError(f"Record '{fqdn}' is not under zone '{zone}'")
    return name.removesuffix(suffix)


def find_txt_record(records: Iterable[Record], name: str) -> Record | None:
    """Return the first TXT record called ``name``, or ``None``."""
    for record in records:
        if record.name == name and record.type.upper() == TXT:
            return record
    return None
