"""Structured logging setup for the pusher."""

import logging

__all__ = ["configure_logs", "ContextFormatter", "CONTEXT_FIELDS"]

# Fields pushers attach to log records through ``extra``
CONTEXT_FIELDS = ("method", "target", "status_code", "error")


class ContextFormatter(logging.Formatter):
    """Formatter that appends structured context fields as key=value pairs."""

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        context = " ".join(
            f"{name}={getattr(record, name)}" for name in CONTEXT_FIELDS if hasattr(record, name)
        )
        return f"{message} | {context}" if context else message


def configure_logs() -> None:
    """Configure console logging.

    Sets up:
    - Root logger at INFO level.
    - Framework loggers (aiohttp, asyncio) at WARNING level.
    - Application loggers (payload_pusher) at DEBUG level.
    - Structured format with timestamp, level, module, line number and
      the push context (method, target, status code, error) when present.
    """
    log_format = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d - %(message)s"
    date_format = "%d/%m/%y %H:%M:%S"

    formatter = ContextFormatter(log_format, date_format)
    handler = logging.StreamHandler()
    handler.setFormatter(formatter)

    # Root logger
    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)

    # Suppress verbose framework loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    # Application loggers
    logging.getLogger("payload_pusher").setLevel(logging.DEBUG)
