"""
Utilities module for watson-speech.

Provides logging, common helpers, and utility functions.
"""

from watson_speech.utils.logging import (
    setup_logging,
    PerformanceLogger,
    JsonFormatter,
    ConsoleFormatter,
    request_id_var,
)
from watson_speech.utils.helpers import (
    drop_none,
    generate_request_id,
    join_url,
    mask_secret,
    quote_segment,
)

__all__ = [
    "setup_logging",
    "PerformanceLogger",
    "JsonFormatter",
    "ConsoleFormatter",
    "request_id_var",
    "drop_none",
    "generate_request_id",
    "join_url",
    "mask_secret",
    "quote_segment",
]
