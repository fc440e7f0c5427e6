"""Utility functions for logging."""

import re
from typing import Any, Dict, Mapping

SENSITIVE_KEYS = {
    'access_token', 'token', 'secret', 'password',
    'authorization', 'auth', 'credential'
}


def _mask(value: Any) -> Any:
    if not isinstance(value, str):
        return "[REDACTED]"
    # Keep the auth scheme of header values like "Bearer <token>"
    scheme, _, secret = value.partition(" ")
    if secret:
        return f"{scheme} ****"
    return "****"


def redact_sensitive_data(data: Mapping[str, Any]) -> Dict[str, Any]:
    """Redact sensitive values from a mapping such as request headers.

    Args:
        data: Mapping to redact, nested mappings are redacted recursively

    Returns:
        A new dictionary with values under sensitive keys masked
    """
    redacted: Dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, Mapping):
            redacted[key] = redact_sensitive_data(value)
        elif any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            redacted[key] = _mask(value)
        else:
            redacted[key] = value
    return redacted


def sanitize_log_message(message: str) -> str:
    """Remove sensitive patterns from log messages.

    Args:
        message: Log message to sanitize

    Returns:
        Sanitized message
    """
    patterns = [
        (r'Bearer\s+[\w\-\.]+', 'Bearer ****'),
        (r'access_token=[\w\-\.]+', 'access_token=****'),
        (r'(sandbox|live)_[\w\-]{8,}', r'\1_****'),  # GoCardless token shape
    ]

    result = message
    for pattern, replacement in patterns:
        result = re.sub(pattern, replacement, result)

    return result
