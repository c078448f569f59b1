"""Configuration loading and validation from environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from nicapi_dns.api import API_BASE, DEFAULT_TIMEOUT
from nicapi_dns.errors import MissingCredentialError

API_KEY_ENV = "LUMASERV_API_KEY"

_DEFAULT_NAMESERVERS = ("8.8.8.8:53", "8.8.4.4:53")
_DEFAULT_TIMEOUT_SECONDS = float(DEFAULT_TIMEOUT)
_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class AppConfig:
    """Application configuration loaded from environment variables."""

    api_key: str
    nameservers: tuple[str, ...] = _DEFAULT_NAMESERVERS
    api_url: str = API_BASE
    timeout_seconds: float = _DEFAULT_TIMEOUT_SECONDS
    cleanup_match_value: bool = True


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got: {raw!r}")


def _parse_nameservers(raw: str) -> tuple[str, ...]:
    return tuple(ns.strip() for ns in raw.split(",") if ns.strip())


def load_config() -> AppConfig:
    """Load and validate application configuration from environment variables."""
    api_key = os.environ.get(API_KEY_ENV)
    if not api_key:
        raise MissingCredentialError(f"Required environment variable {API_KEY_ENV} is not set")

    raw_nameservers = os.environ.get("DNS01_RECURSIVE_NAMESERVERS")
    nameservers = _parse_nameservers(raw_nameservers) if raw_nameservers else _DEFAULT_NAMESERVERS

    api_url = os.environ.get("NICAPI_API_URL", API_BASE)

    raw_timeout = os.environ.get("NICAPI_TIMEOUT_SECONDS", str(_DEFAULT_TIMEOUT_SECONDS))
    try:
        timeout_seconds = float(raw_timeout)
    except ValueError:
        raise ValueError(f"NICAPI_TIMEOUT_SECONDS must be a number, got: {raw_timeout!r}")
    if timeout_seconds <= 0:
        raise ValueError(f"NICAPI_TIMEOUT_SECONDS must be positive, got: {timeout_seconds}")

    cleanup_match_value = _parse_bool(
        "NICAPI_CLEANUP_MATCH_VALUE", os.environ.get("NICAPI_CLEANUP_MATCH_VALUE", "true")
    )

    return AppConfig(
        api_key=api_key,
        nameservers=nameservers,
        api_url=api_url,
        timeout_seconds=timeout_seconds,
        cleanup_match_value=cleanup_match_value,
    )
