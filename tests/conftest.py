"""Shared fixtures for collect_sdk tests."""

import io
from collections.abc import Generator

import pytest

from collect_sdk.config import LogConfiguration, LogLevel
from collect_sdk.logger import CollectLogger, reset_shared_logger
from collect_sdk.request_logger import RequestTraceLogger


@pytest.fixture(autouse=True)
def shared_logger() -> Generator[CollectLogger, None, None]:
    """Give every test a fresh shared logger and restore a silent one afterwards."""
    yield reset_shared_logger()
    reset_shared_logger()


@pytest.fixture
def debug_config() -> LogConfiguration:
    """Configuration with network tracing enabled."""
    return LogConfiguration(level=LogLevel.INFO, is_network_debug_enabled=True)


@pytest.fixture
def sink() -> io.StringIO:
    """In-memory output stream."""
    return io.StringIO()


@pytest.fixture
def trace_logger(debug_config: LogConfiguration, sink: io.StringIO) -> RequestTraceLogger:
    """Trace logger writing to the in-memory sink."""
    return RequestTraceLogger(debug_config, logger_prefix="TestSDK", sink=sink)
