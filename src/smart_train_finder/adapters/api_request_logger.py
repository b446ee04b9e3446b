"""Utility for logging API requests when STF_LOG_REQUESTS is enabled."""

import json
import logging
import os

logger = logging.getLogger(__name__)

SENSITIVE_HEADERS = {"authorization", "cookie", "db-api-key", "db-client-id"}


def should_log_requests() -> bool:
    """Check if request logging is enabled via STF_LOG_REQUESTS environment variable."""
    return os.getenv("STF_LOG_REQUESTS", "").lower() == "true"


def _redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact credentials from logged headers."""
    return {
        k: "***REDACTED***" if k.lower() in SENSITIVE_HEADERS else v for k, v in headers.items()
    }


def log_api_request(
    method: str,
    url: str,
    headers: dict[str, str] | None = None,
    priority: str | None = None,
) -> None:
    """Log API request details if STF_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        headers: Request headers (optional, credentials are redacted).
        priority: Name of the request's priority class (optional).
    """
    if not should_log_requests():
        return

    log_parts = [f"{method} {url}"]

    if priority:
        log_parts.append(f"Priority: {priority}")

    if headers:
        safe_headers = _redact_sensitive_headers(headers)
        log_parts.append(f"Headers: {json.dumps(safe_headers, indent=2)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
