"""Utility modules for the Collect SDK."""

from .formatting import (
    MAX_TEXT_COUNT_TO_PRINT,
    SEPARATOR,
    normalize_headers,
    render_value,
    stringify_json,
)

__all__ = ["MAX_TEXT_COUNT_TO_PRINT", "SEPARATOR", "normalize_headers", "render_value", "stringify_json"]
