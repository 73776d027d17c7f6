"""
Common helper functions for watson-speech.

This module provides utility functions used across the package.
"""

import uuid
from typing import Any, Dict, Optional
from urllib.parse import quote


def generate_request_id() -> str:
    """
    Generate a unique request ID.

    Returns:
        Unique request ID string in format: req_<uuid4>
    """
    return f"req_{uuid.uuid4().hex[:12]}"


def mask_secret(secret: Optional[str], visible: int = 4) -> str:
    """
    Mask a credential for logging.

    Args:
        secret: API key or token
        visible: Number of leading characters to keep

    Returns:
        Masked string

    Example:
        >>> mask_secret("abcdefghijkl")
        'abcd********'
    """
    if not secret:
        return "<unset>"
    if len(secret) <= visible:
        return "*" * len(secret)
    return secret[:visible] + "*" * min(len(secret) - visible, 8)


def join_url(base_url: str, *segments: str) -> str:
    """
    Join a service URL with path segments.

    Example:
        >>> join_url("https://host/instances/x/", "v1", "voices")
        'https://host/instances/x/v1/voices'
    """
    parts = [base_url.rstrip("/")]
    parts.extend(segment.strip("/") for segment in segments if segment)
    return "/".join(parts)


def drop_none(values: Dict[str, Any]) -> Dict[str, Any]:
    """
    Remove keys whose value is None.

    Booleans are rendered as lowercase strings so they can be used as
    query parameters.
    """
    cleaned = {}
    for key, value in values.items():
        if value is None:
            continue
        if isinstance(value, bool):
            value = "true" if value else "false"
        cleaned[key] = value
    return cleaned


def quote_segment(value: str) -> str:
    """
    Percent-encode one URL path segment.

    ``/``, ``?`` and ``#`` are encoded too, so IDs and custom words
    always address a single path element.

    Example:
        >>> quote_segment("C#")
        'C%23'
    """
    return quote(str(value), safe="")
