"""Network traces for SDK requests."""

import sys
from typing import TextIO

from .config import LogConfiguration
from .logger import get_shared_logger
from .schemas import OutgoingRequestEvent, ResponseEvent
from .utils.formatting import (
    MAX_TEXT_COUNT_TO_PRINT,
    SEPARATOR,
    decode_text,
    describe_error,
    normalize_headers,
    parse_json_object,
    stringify_json,
    stringify_payload,
    stringify_url,
    too_big_message,
)

SEND_MARKER = "⬆️ Send"
FAILED_MARKER = "❗Failed ⬇️"
SUCCESS_MARKER = "✅ Success ⬇️"


class RequestTraceLogger:
    """
    Print traces of outgoing requests and their responses.

    Nothing is printed unless `configuration.is_network_debug_enabled` is set.
    None of the log methods raise: anything that cannot be formatted is left
    out of the trace.
    """

    def __init__(
        self,
        configuration: LogConfiguration | None = None,
        logger_prefix: str | None = None,
        sink: TextIO | None = None,
    ) -> None:
        """
        Initialize the trace logger.

        Args:
            configuration: Configuration to read the debug flag from (defaults to
                the shared CollectLogger configuration)
            logger_prefix: Tag printed on every line (defaults to the shared prefix)
            sink: Stream to write to (defaults to sys.stderr at write time)
        """
        shared = get_shared_logger()
        self._configuration = configuration if configuration is not None else shared.configuration
        self.logger_prefix = logger_prefix if logger_prefix is not None else shared.logger_prefix
        self._sink = sink

    @property
    def configuration(self) -> LogConfiguration:
        """Configuration the debug flag is read from on every call."""
        return self._configuration

    def log_outgoing_request(self, event: OutgoingRequestEvent) -> None:
        """Log a request about to be sent."""
        if not self._configuration.is_network_debug_enabled:
            return

        tag = f"{SEND_MARKER} {self.logger_prefix}"
        lines = [f"{tag} request url: {stringify_url(event.url)}"]
        header_block = normalize_headers(event.headers) if event.headers else None
        if header_block is not None:
            lines.append(f"{tag} request headers:")
            lines.append(header_block)
        if event.payload is not None:
            lines.append(f"{tag} request payload:")
            lines.append(stringify_payload(event.payload, self.logger_prefix))
        lines.append(SEPARATOR)
        self._emit(lines)

    def log_failed_response(self, event: ResponseEvent) -> None:
        """Log a failed request, with whatever part of the response was received."""
        if not self._configuration.is_network_debug_enabled:
            return

        tag = f"{FAILED_MARKER} {self.logger_prefix}"
        lines = []
        if event.url is not None:
            lines.append(f"{tag} request url: {stringify_url(event.url)}")
        lines.append(f"{tag} response status code: {event.status_code}")
        header_block = normalize_headers(event.headers) if event.headers is not None else None
        if header_block is not None:
            lines.append(f"{tag} response headers:")
            lines.append(header_block)
        if event.body is not None:
            body_text = decode_text(event.body)
            if body_text is not None:
                lines.append(f"{tag} response extra info:")
                if len(body_text) > MAX_TEXT_COUNT_TO_PRINT:
                    lines.append(too_big_message(self.logger_prefix))
                else:
                    lines.append(body_text)
        lines.append(f"{tag} response error message: {describe_error(event.error)}")
        lines.append(SEPARATOR)
        self._emit(lines)

    def log_success_response(self, event: ResponseEvent) -> None:
        """Log a successful response."""
        if not self._configuration.is_network_debug_enabled:
            return

        tag = f"{SUCCESS_MARKER} {self.logger_prefix}"
        # The URL line is printed even when there is no URL, unlike failures
        lines = [
            f"{tag} request url: {stringify_url(event.url)}",
            f"{tag} response code: {event.status_code}",
        ]
        header_block = normalize_headers(event.headers) if event.headers is not None else None
        if header_block is not None:
            lines.append(f"{tag} response headers:")
            lines.append(header_block)
        if event.body is not None:
            json_body = parse_json_object(event.body)
            if json_body is not None:
                lines.append(f"{tag} response JSON:")
                lines.append(stringify_json(json_body, self.logger_prefix))
        lines.append(SEPARATOR)
        self._emit(lines)

    def _emit(self, lines: list[str]) -> None:
        sink = self._sink if self._sink is not None else sys.stderr
        try:
            print("\n".join(lines), file=sink)
        except (OSError, ValueError):
            # Closed or broken stream
            pass
