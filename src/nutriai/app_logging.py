"""Logging configuration helpers."""

import logging

# HTTP clients under supabase and openai log every request at INFO.
_NOISY_LOGGERS = ("httpx", "httpcore", "hpack")


def configure_logging(level: str | int = logging.INFO) -> None:
    """Send ``nutriai`` logs to a single stream handler; safe to call repeatedly."""
    logger = logging.getLogger("nutriai")
    logger.setLevel(level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    if logger.handlers:
        return
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(levelname)s: %(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False
