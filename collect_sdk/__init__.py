"""Collect SDK logging.

Network debug traces and SDK event logging for the form data collection SDK.
"""

from .api_client import APIClient, APIResponse
from .config import LogConfiguration, LogLevel
from .logger import LOGGER_PREFIX, CollectLogger, get_shared_logger, reset_shared_logger
from .request_logger import RequestTraceLogger
from .schemas import JsonValue, OutgoingRequestEvent, ResponseEvent

__version__ = "0.1.0"

__all__ = [
    # Network traces
    "RequestTraceLogger",
    "OutgoingRequestEvent",
    "ResponseEvent",
    "JsonValue",
    # Configuration
    "LogConfiguration",
    "LogLevel",
    # Shared logger
    "CollectLogger",
    "LOGGER_PREFIX",
    "get_shared_logger",
    "reset_shared_logger",
    # Client
    "APIClient",
    "APIResponse",
    # Version
    "__version__",
]
