"""Pytest configuration for the gateway client test suite.

Isolates every test from ambient ``INFERENCE_GATEWAY_*`` / ``IG_TIMEOUT_*``
environment variables and the cached config file, and closes pooled HTTP
clients after the session.
"""

from __future__ import annotations

import logging
from typing import Iterator, List

import pytest

from inference_gateway.base.http import close_all_clients
from inference_gateway.config import reset_config_cache

_ENV_VARS = (
    "INFERENCE_GATEWAY_CONFIG_FILE",
    "INFERENCE_GATEWAY_URL",
    "INFERENCE_GATEWAY_API_KEY",
    "INFERENCE_GATEWAY_TIMEOUT",
    "INFERENCE_GATEWAY_LOG_LEVEL",
    "IG_TIMEOUT_HTTP_SECONDS",
    "IG_TIMEOUT_STREAM_SECONDS",
    "IG_TIMEOUT_OVERALL_SECONDS",
)


@pytest.fixture(autouse=True)
def clean_gateway_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_config_cache()
    yield
    reset_config_cache()


@pytest.fixture()
def log_capture() -> Iterator[List[logging.LogRecord]]:
    """Capture records from the ``inference_gateway`` logger at DEBUG."""
    records: List[logging.LogRecord] = []
    handler = logging.Handler()
    handler.emit = lambda record: records.append(record)  # type: ignore
    logger = logging.getLogger("inference_gateway")
    previous = logger.level
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        yield records
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous)


@pytest.fixture(scope="session", autouse=True)
def close_clients_after_session() -> Iterator[None]:
    yield
    close_all_clients()
