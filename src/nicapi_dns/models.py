"""Data classes for NicAPI zones, records and response envelopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nicapi_dns.errors import DecodeError

_SUCCESS_STATUS = "success"


@dataclass(frozen=True)
class Record:
    """A DNS record as stored by NicAPI.

    ``name`` is relative to the zone (e.g. ``_acme-challenge``). ``id`` is only
    set for records that already exist server-side.
    """

    name: str
    type: str = ""
    data: str = ""
    ttl: str | None = None
    id: int | None = None
    zone_id: str | None = None

    def to_dict(self) -> dict:
        result: dict[str, Any] = {}
        if self.id is not None:
            result["id"] = self.id
        result["name"] = self.name
        if self.ttl is not None:
            result["ttl"] = self.ttl
        result["type"] = self.type
        result["data"] = self.data
        if self.zone_id is not None:
            result["zone_id"] = self.zone_id
        return result

    def to_target_dict(self) -> dict:
        """Serialize only the fields NicAPI needs to identify a record for deletion."""
        return {"name": self.name}

    @classmethod
    def from_dict(cls, data: dict) -> Record:
        ttl = data.get("ttl")
        zone_id = data.get("zone_id")
        return cls(
            name=data["name"],
            type=data.get("type") or "",
            data=data.get("data") or "",
            ttl=None if ttl is None else str(ttl),
            id=data.get("id"),
            zone_id=None if zone_id is None else str(zone_id),
        )


@dataclass(frozen=True)
class Zone:
    """Snapshot of a NicAPI zone and its records."""

    id: int
    name: str
    records: tuple[Record, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> Zone:
        """Build a zone from the ``data`` payload of a ``/dns/zones/show`` response."""
        try:
            zone = payload["zone"]
            name = zone["name"]
            if not isinstance(name, str) or not name:
                raise DecodeError(f"Malformed zone payload: invalid zone name {name!r}")
            return cls(
                id=zone["id"],
                name=name,
                records=tuple(Record.from_dict(r) for r in zone.get("records") or []),
            )
        except (AttributeError, KeyError, TypeError) as exc:
            raise DecodeError(f"Malformed zone payload: {exc!r}") from exc


@dataclass(frozen=True)
class RecordMutationRequest:
    """Body of a ``/dns/zones/records/add`` or ``/dns/zones/records/delete`` call."""

    zone: str
    records: tuple[Record, ...]
    target_only: bool = False

    def to_dict(self) -> dict:
        if self.target_only:
            records = [r.to_target_dict() for r in self.records]
        else:
            records = [r.to_dict() for r in self.records]
        return {"zone": self.zone, "records": records}


@dataclass(frozen=True)
class ApiMessage:
    """A single error, warning or success message from an envelope."""

    code: int
    message: str

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    @classmethod
    def from_dict(cls, data: dict) -> ApiMessage:
        return cls(code=int(data.get("code") or 0), message=data.get("message") or "")


def _messages(raw: Any) -> tuple[ApiMessage, ...]:
    return tuple(ApiMessage.from_dict(m) for m in raw or [] if isinstance(m, dict))


@dataclass(frozen=True)
class ApiEnvelope:
    """The uniform wrapper NicAPI puts around every response payload."""

    status: str
    errors: tuple[ApiMessage, ...] = ()
    warnings: tuple[ApiMessage, ...] = ()
    successes: tuple[ApiMessage, ...] = ()
    client_transaction_id: str | None = None
    server_transaction_id: str | None = None
    data: Any = field(default=None, compare=False)

    @property
    def ok(self) -> bool:
        return self.status == _SUCCESS_STATUS

    @classmethod
    def from_dict(cls, data: Any) -> ApiEnvelope:
        if not isinstance(data, dict):
            raise DecodeError(f"Expected a JSON object envelope, got {type(data).__name__}")
        metadata = data.get("metadata") or {}
        messages = data.get("messages") or {}
        try:
            return cls(
                status=data.get("status") or "",
                errors=_messages(messages.get("errors")),
                warnings=_messages(messages.get("warnings")),
                successes=_messages(messages.get("success")),
                client_transaction_id=metadata.get("clientTransactionId"),
                server_transaction_id=metadata.get("serverTransactionId"),
                data=data.get("data"),
            )
        except (AttributeError, TypeError, ValueError) as exc:
            raise DecodeError(f"Malformed response envelope: {exc!r}") from exc
