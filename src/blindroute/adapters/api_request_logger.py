"""Utility for logging upstream API requests when BLINDROUTE_LOG_REQUESTS is enabled."""

import json
import logging
import os
from typing import Any

logger = logging.getLogger(__name__)

REDACTED = "***REDACTED***"
_SENSITIVE_HEADERS = {"appkey", "authorization", "cookie", "x-api-key"}
_SENSITIVE_PARAMS = {"servicekey", "appkey"}


def should_log_requests() -> bool:
    """Check if request logging is enabled via BLINDROUTE_LOG_REQUESTS environment variable."""
    return os.getenv("BLINDROUTE_LOG_REQUESTS", "").lower() == "true"


def _redact_params(params: dict[str, Any] | None) -> dict[str, Any]:
    """Hide API keys passed as query parameters."""
    if not params:
        return {}
    return {k: REDACTED if k.lower() in _SENSITIVE_PARAMS else v for k, v in params.items()}


def _build_url_with_params(url: str, params: dict[str, Any] | None) -> str:
    """Build full URL with (redacted) query parameters."""
    safe_params = _redact_params(params)
    if not safe_params:
        return url
    param_str = "&".join(f"{k}={v}" for k, v in sorted(safe_params.items()))
    return f"{url}?{param_str}" if "?" not in url else f"{url}&{param_str}"


def _redact_sensitive_headers(headers: dict[str, str]) -> dict[str, str]:
    """Redact sensitive headers from logging."""
    return {k: REDACTED if k.lower() in _SENSITIVE_HEADERS else v for k, v in headers.items()}


def _format_payload(payload: Any) -> str:
    """Format payload for logging."""
    try:
        return (
            json.dumps(payload, indent=2, ensure_ascii=False)
            if isinstance(payload, dict)
            else str(payload)
        )
    except (TypeError, ValueError):
        return str(payload)


def log_api_request(
    method: str,
    url: str,
    params: dict[str, Any] | None = None,
    headers: dict[str, str] | None = None,
    payload: Any = None,
) -> None:
    """Log API request details if BLINDROUTE_LOG_REQUESTS is enabled.

    Args:
        method: HTTP method (GET, POST, etc.).
        url: Request URL.
        params: Query parameters; service keys are redacted.
        headers: Request headers; app keys and credentials are redacted.
        payload: Request body.
    """
    if not should_log_requests():
        return

    log_parts = [f"{method} {_build_url_with_params(url, params)}"]

    if headers:
        log_parts.append(f"Headers: {json.dumps(_redact_sensitive_headers(headers), indent=2)}")

    if payload is not None:
        log_parts.append(f"Payload: {_format_payload(payload)}")

    logger.info("API Request:\n" + "\n".join(log_parts))
