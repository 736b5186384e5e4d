"""HTTP client that submits collected data and reports it to the trace logger."""

import asyncio
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from aiohttp import ClientError, ClientSession, ClientTimeout
from multidict import CIMultiDict

from .config import LogLevel
from .logger import get_shared_logger
from .request_logger import RequestTraceLogger
from .schemas import JsonValue, OutgoingRequestEvent, ResponseEvent


@dataclass
class APIResponse:
    """Result of a submission."""

    status_code: int
    url: str | None = None
    headers: CIMultiDict[str] = field(default_factory=CIMultiDict)
    body: bytes | None = None
    error: BaseException | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and 200 <= self.status_code < 300


def _join_url(base_url: str, path: str) -> str:
    if not path:
        return base_url
    return f"{base_url.rstrip('/')}/{path.lstrip('/')}"


class APIClient:
    """
    Submit JSON payloads to a remote endpoint.

    Each call sends exactly one POST request. HTTP and transport failures are
    returned as an APIResponse instead of being raised.
    """

    def __init__(
        self,
        base_url: str,
        *,
        trace_logger: RequestTraceLogger | None = None,
        session: ClientSession | None = None,
        timeout: float = 30.0,
    ) -> None:
        """
        Initialize the client.

        Args:
            base_url: Endpoint the payloads are posted to
            trace_logger: Logger for network traces (defaults to one bound to the
                shared configuration)
            session: Existing aiohttp session to use; it is not closed by the client
            timeout: Total request timeout in seconds
        """
        self.base_url = base_url
        self.trace_logger = trace_logger if trace_logger is not None else RequestTraceLogger()
        self._session = session
        self._timeout = ClientTimeout(total=timeout)

    async def send_request(
        self,
        path: str = "",
        payload: Mapping[str, JsonValue] | None = None,
        headers: Mapping[str, str] | None = None,
    ) -> APIResponse:
        """
        POST a payload and trace the request and its outcome.

        Args:
            path: Path appended to the base URL
            payload: JSON object to send as the request body
            headers: Extra request headers

        Returns:
            The response, with `error` set if no response was received
        """
        url = _join_url(self.base_url, path)
        request_headers = {"Content-Type": "application/json", **(headers or {})}

        self.trace_logger.log_outgoing_request(
            OutgoingRequestEvent(url=url, headers=request_headers, payload=payload)
        )

        if self._session is not None:
            return await self._post(self._session, url, payload, request_headers)

        async with ClientSession(timeout=self._timeout) as session:
            return await self._post(session, url, payload, request_headers)

    async def _post(
        self,
        session: ClientSession,
        url: str,
        payload: Mapping[str, JsonValue] | None,
        headers: dict[str, str],
    ) -> APIResponse:
        json_body: Any = dict(payload) if payload is not None else None
        try:
            async with session.post(url, json=json_body, headers=headers, timeout=self._timeout) as resp:
                body = await resp.read()
                result = APIResponse(
                    status_code=resp.status,
                    url=str(resp.url),
                    headers=CIMultiDict(resp.headers),
                    body=body,
                )
        except (ClientError, asyncio.TimeoutError) as e:
            get_shared_logger().log_event(f"request to {url} failed: {e!r}", LogLevel.WARNING)
            result = APIResponse(status_code=0, url=url, error=e)
            self.trace_logger.log_failed_response(
                ResponseEvent(status_code=0, url=url, error=e)
            )
            return result

        event = ResponseEvent(
            status_code=result.status_code,
            url=result.url,
            headers=result.headers,
            body=result.body,
        )
        if result.ok:
            self.trace_logger.log_success_response(event)
        else:
            get_shared_logger().log_event(
                f"request to {url} returned status {result.status_code}", LogLevel.WARNING
            )
            self.trace_logger.log_failed_response(event)
        return result
