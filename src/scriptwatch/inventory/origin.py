"""Origin classification — first-party vs third-party script references."""

from __future__ import annotations

from urllib.parse import SplitResult, urljoin, urlsplit

from scriptwatch.inventory.models import Origin


def classify(page_url: str, script_url: str | None) -> Origin:
    """Classify a script reference relative to the page that loads it.

    Relative references are resolved against ``page_url`` before the host
    comparison. Inline scripts and anything that does not parse are
    ``Origin.UNKNOWN``; this function never raises.
    """
    if not script_url:
        return Origin.UNKNOWN

    page = _split_absolute(page_url)
    if page is None or not page.hostname:
        return Origin.UNKNOWN

    try:
        resolved = urljoin(page_url, script_url)
    except ValueError:
        return Origin.UNKNOWN

    script = _split_absolute(resolved)
    if script is None:
        return Origin.UNKNOWN

    # Hostless schemes such as data: and blob: never match the page host
    if (script.hostname or "").lower() == page.hostname.lower():
        return Origin.FIRST_PARTY
    return Origin.THIRD_PARTY


def _split_absolute(url: str) -> SplitResult | None:
    """Split an absolute URL, or return None if it has no scheme or is invalid."""
    try:
        parts = urlsplit(url)
        _ = parts.port  # raises ValueError when out of range
    except ValueError:
        return None
    if not parts.scheme:
        return None
    return parts
