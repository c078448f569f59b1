"""Shared test fixtures for nicapi-dns."""

import logging

import pytest

_ENV_VARS = (
    "LUMASERV_API_KEY",
    "DNS01_RECURSIVE_NAMESERVERS",
    "NICAPI_API_URL",
    "NICAPI_TIMEOUT_SECONDS",
    "NICAPI_CLEANUP_MATCH_VALUE",
    "NICAPI_LOG_LEVEL",
    "CERTBOT_DOMAIN",
    "CERTBOT_VALIDATION",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch, request):
    """Keep tests independent of the developer's environment (live tests opt out)."""
    if request.node.get_closest_marker("live"):
        return
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def pytest_configure(config):
    config.addinivalue_line("markers", "live: talks to the real NicAPI service")


@pytest.fixture(autouse=True)
def _restore_http_log_levels():
    """The CLI quiets the HTTP client loggers; undo that between tests."""
    loggers = [logging.getLogger(name) for name in ("httpx", "httpcore")]
    levels = [lg.level for lg in loggers]
    yield
    for lg, level in zip(loggers, levels):
        lg.setLevel(level)
