"""Event snapshots passed to the network trace logger.

These are built by the submission client at the points where a request is
dispatched, fails, or succeeds.
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Union

# JSON-like tree: str, number, bool, None, nested mapping, or ordered sequence
JsonValue = Union[str, int, float, bool, None, Mapping[str, "JsonValue"], Sequence["JsonValue"]]


@dataclass(frozen=True)
class OutgoingRequestEvent:
    """A request about to be sent."""

    url: str | None = None
    headers: Mapping[str, str] | None = None
    payload: Mapping[str, JsonValue] | None = None


@dataclass(frozen=True)
class ResponseEvent:
    """
    A response received for a request, or a failed attempt.

    Semantics:
    - status_code is always set (0 when no response was received)
    - headers keys are case-insensitive tokens, values may be of any printable type
    - error is only meaningful on the failure path
    """

    status_code: int
    url: str | None = None
    headers: Mapping[Any, Any] | None = None
    body: bytes | None = None
    error: BaseException | None = None
