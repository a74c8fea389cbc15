"""Shared utilities for schuldaten_sachsen."""

import requests

DEFAULT_TIMEOUT = 30


def fetch(url: str, *, timeout: int = DEFAULT_TIMEOUT, **kwargs) -> requests.Response:
    """Fetch a URL. A failed request aborts the run, there is no retry."""
    response = requests.get(url, timeout=timeout, **kwargs)
    response.raise_for_status()
    return response


def is_present(value) -> bool:
    """True for values that carry data: not None and not an empty string."""
    return value is not None and value != ""


def unique_by_key(items):
    """Drop items whose .key was already seen, keeping feed order."""
    seen = set()
    result = []
    for item in items:
        if item.key in seen:
            continue
        seen.add(item.key)
        result.append(item)
    return result
