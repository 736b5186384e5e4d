"""Shared SDK logger."""

from pathlib import Path

from loguru import logger

from .config import LogConfiguration, LogLevel

LOGGER_PREFIX = "CollectSDK"

_LOGURU_LEVELS = {
    LogLevel.INFO: "INFO",
    LogLevel.WARNING: "WARNING",
}


class CollectLogger:
    """
    Process-wide logger of the SDK.

    Owns the LogConfiguration that every SDK logger reads, and the prefix used
    to tag emitted lines. SDK events go through loguru; network traces are
    printed by RequestTraceLogger using the same configuration.
    """

    def __init__(
        self,
        configuration: LogConfiguration | None = None,
        logger_prefix: str = LOGGER_PREFIX,
    ) -> None:
        self.configuration = configuration if configuration is not None else LogConfiguration()
        self.logger_prefix = logger_prefix

    def log_event(self, text: str, level: LogLevel = LogLevel.INFO) -> None:
        """
        Log an SDK event if the configured level allows it.

        Args:
            text: The message to log
            level: Severity of the event (info or warning)
        """
        if not self.configuration.level.allows(level):
            return

        logger.opt(depth=1).log(_LOGURU_LEVELS[level], f"{self.logger_prefix} {text}")

    def disable_all_loggers(self) -> None:
        """Stop both SDK event logging and network tracing."""
        self.configuration.level = LogLevel.NONE
        self.configuration.is_network_debug_enabled = False

    def add_file_sink(self, path: str | Path) -> int:
        """
        Mirror SDK events into a rotating log file.

        Returns:
            The loguru handler id, for logger.remove()
        """
        return logger.add(
            str(path),
            rotation="10 MB",
            retention="7 days",
            compression="gz",
            format="{time:YYYY-MM-DD HH:mm:ss} | {level:<8} | {message}",
            filter=lambda record: record["message"].startswith(self.logger_prefix),
        )


_shared_logger = CollectLogger()


def get_shared_logger() -> CollectLogger:
    """Get the process-wide CollectLogger."""
    return _shared_logger


def reset_shared_logger(configuration: LogConfiguration | None = None) -> CollectLogger:
    """Replace the process-wide CollectLogger with a fresh one."""
    global _shared_logger
    _shared_logger = CollectLogger(configuration)
    return _shared_logger
