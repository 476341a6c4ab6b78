"""
Utility functions for the API.
"""
import logging
import re
from typing import Optional

from whoiswho.errors import InvalidInputError

# Set up logging
logger = logging.getLogger(__name__)

# Largest integer a JSON number round-trips exactly
MAX_FID = 2 ** 53 - 1

ASCII_DIGITS = re.compile(r"[0-9]+")

DEFAULT_SEARCH_LIMIT = 10
MAX_SEARCH_LIMIT = 50


def parse_fid(raw: Optional[str], name: str = "fid") -> int:
    """
    Validate a Farcaster ID query parameter

    Args:
        raw: Raw parameter value
        name: Parameter name used in error messages

    Returns:
        The FID as a positive integer
    """
    if raw is None or str(raw).strip() == "":
        raise InvalidInputError(f"{name.upper()} parameter is required")

    value = str(raw).strip()
    if not is_ascii_number(value):
        raise InvalidInputError(f"{name.upper()} must be a valid number")

    fid = int(value)
    if fid < 1 or fid > MAX_FID:
        raise InvalidInputError(f"Invalid {name.upper()} parameter")
    return fid


def is_ascii_number(value: str) -> bool:
    """True only for plain 0-9 digits; superscripts and other unicode digits do not count."""
    return ASCII_DIGITS.fullmatch(value) is not None


def parse_optional_fid(raw: Optional[str], name: str) -> Optional[int]:
    if raw is None or str(raw).strip() == "":
        return None
    return parse_fid(raw, name)


def parse_search_limit(raw: Optional[str]) -> int:
    """Default to 10 for missing or unusable values, never above 50."""
    try:
        limit = int(raw) if raw is not None else DEFAULT_SEARCH_LIMIT
    except ValueError:
        limit = DEFAULT_SEARCH_LIMIT
    if limit < 1:
        limit = DEFAULT_SEARCH_LIMIT
    return min(limit, MAX_SEARCH_LIMIT)


def cache_control(max_age: int, stale_while_revalidate: Optional[int] = None) -> str:
    """Shared-cache header for successful GET responses."""
    swr = stale_while_revalidate if stale_while_revalidate is not None else max_age * 2
    return f"public, s-maxage={max_age}, stale-while-revalidate={swr}"


def body_excerpt(text: str, limit: int = 300) -> str:
    """Shorten an upstream error body for logging."""
    text = text or ""
    return text if len(text) <= limit else text[:limit] + "..."
