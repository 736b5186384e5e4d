"""Text helpers for network traces.

Every helper here either returns a string or None. None means "nothing to
print" and is never an error.
"""

import json
from collections.abc import Mapping
from typing import Any

MAX_TEXT_COUNT_TO_PRINT = 50000

SEPARATOR = "-" * 36


def too_big_message(prefix: str) -> str:
    """Placeholder printed instead of oversized text."""
    return f"{prefix} response size is too big to print. Use debugger if needed."


def stringify_url(url: object | None) -> str:
    """Render a URL, or "" when there is none."""
    if url is None:
        return ""
    return render_value(url)


def render_value(value: object) -> str:
    """
    Render any value as display text.

    Strings are returned unchanged, bytes are decoded leniently, anything else
    uses its str() form. Objects whose str() raises render as "".
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bytes | bytearray):
        return bytes(value).decode("utf-8", errors="replace")
    try:
        return str(value)
    except Exception:
        return ""


def normalize_headers(headers: Mapping[Any, Any]) -> str | None:
    """
    Render headers as a bracketed block, one "  key : value" line per entry.

    Entries are sorted by key so the same headers always print the same way.
    Returns None if the mapping cannot be iterated.
    """
    try:
        items = list(headers.items())
    except Exception:
        return None
    entries = sorted((render_value(key), render_value(value)) for key, value in items)
    lines = "\n".join(f"  {key} : {value}" for key, value in entries)
    return f"[\n{lines} \n]"


def decode_text(data: bytes) -> str | None:
    """Decode strict UTF-8, or None if the bytes are not valid UTF-8."""
    try:
        return bytes(data).decode("utf-8")
    except (UnicodeDecodeError, TypeError):
        return None


def parse_json_object(data: bytes) -> dict[str, Any] | None:
    """Parse bytes as JSON, keeping the result only if it is a top-level object."""
    text = decode_text(data)
    if text is None:
        return None
    try:
        parsed = json.loads(text)
    except (ValueError, RecursionError):
        return None
    if not isinstance(parsed, dict):
        return None
    return parsed


def dump_json(value: object) -> str | None:
    """Pretty-print a JSON-like tree, or None if it is not serializable."""
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError, RecursionError):
        return None


def stringify_json(value: object, prefix: str) -> str:
    """
    Pretty-print JSON for a trace.

    Returns "" when the value cannot be serialized, and the too-big
    placeholder when the text exceeds MAX_TEXT_COUNT_TO_PRINT characters.
    """
    text = dump_json(value)
    if text is None:
        return ""
    if len(text) > MAX_TEXT_COUNT_TO_PRINT:
        return too_big_message(prefix)
    return text


def stringify_payload(payload: object, prefix: str) -> str:
    """Pretty-print a request payload; only mappings are printed."""
    if not isinstance(payload, Mapping):
        return ""
    return stringify_json(dict(payload), prefix)


def describe_error(error: BaseException | None) -> str:
    """Human-readable description of an error, or ""."""
    if error is None:
        return ""
    return render_value(error)
