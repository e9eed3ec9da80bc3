"""
Settings Core - Settings Access.

Provides configuration reads separated from the web layer.
"""

import logging
from typing import Any

from config import get_config

logger = logging.getLogger(__name__)


def get_setting(key: str, default: Any = None) -> Any:
    """
    Gets a single setting value.

    Args:
        key: Setting key
        default: Default value if key not found

    Returns:
        Setting value or default
    """
    config = get_config()
    return config.get(key, default)


def _get_positive_int(key: str, default: int) -> int:
    value = get_setting(key, default)
    try:
        number = int(value)
    except (TypeError, ValueError):
        logger.warning(f"Invalid value for {key}: {value!r}, using {default}")
        return default
    if number < 1:
        logger.warning(f"Invalid value for {key}: {value!r}, using {default}")
        return default
    return number


def get_description_max_chars() -> int:
    """Returns how many description characters a result summary shows."""
    return _get_positive_int("DESCRIPTION_MAX_CHARS", 400)


def get_max_search_sessions() -> int:
    """Returns how many concurrent search sessions are kept in memory."""
    return _get_positive_int("MAX_SEARCH_SESSIONS", 500)
