"""Structured logger for observability."""

import logging
from typing import Any

_logger = logging.getLogger("lead_gated_downloads")
_logger.setLevel(logging.INFO)

if not _logger.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    formatter = logging.Formatter(
        "%(asctime)s | %(levelname)s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def log_event(
    request_id: str,
    component: str,
    level: int = logging.INFO,
    **kwargs: Any,
) -> None:
    """
    Log structured event for a request.

    Args:
        request_id: Request identifier (UUID string)
        component: Component name (e.g., 'http', 'intake', 'otp')
        level: Log level (default: INFO)
        **kwargs: Additional structured fields to log
    """
    fields = {
        "request_id": request_id,
        "component": component,
    }
    fields.update(kwargs)

    log_parts = [f"{k}={v!r}" for k, v in fields.items()]
    _logger.log(level, " | ".join(log_parts))


def log_rate_limited(
    request_id: str,
    scope: str,
    client_ip: str,
    reset_in_seconds: int,
    **kwargs: Any,
) -> None:
    """
    Log a request rejected by the rate limiter.

    Args:
        request_id: Request identifier
        scope: Rate limit scope (e.g., 'download-request', 'otp-verify')
        client_ip: Client IP the counter is keyed on
        reset_in_seconds: Seconds until the window resets
        **kwargs: Additional fields
    """
    log_event(
        request_id,
        "rate_limit",
        logging.WARNING,
        rate_limit_scope=scope,
        client_ip=client_ip,
        reset_in_seconds=reset_in_seconds,
        **kwargs,
    )


logger = _logger
