"""Load the list of pages to scan from YAML."""

from __future__ import annotations

from pathlib import Path
from urllib.parse import urlsplit

import yaml


def load_pages(path: str | Path) -> list[str]:
    """Load a page list from a YAML file path."""
    text = Path(path).read_text(encoding="utf-8")
    return load_pages_from_string(text)


def load_pages_from_string(text: str) -> list[str]:
    """Parse a YAML page list of the form ``pages: [url, ...]``."""
    data = yaml.safe_load(text)
    if not isinstance(data, dict):
        raise ValueError("Page list YAML must be a mapping")

    raw = data.get("pages", [])
    if isinstance(raw, str):
        raw = [raw]
    if not isinstance(raw, list):
        raise ValueError("'pages' must be a list of URLs")

    return validate_urls(raw)


def validate_urls(urls: list) -> list[str]:
    """Check each entry is an http(s) URL and drop repeats, keeping order."""
    pages: list[str] = []
    seen: set[str] = set()
    for entry in urls:
        if not isinstance(entry, str) or not entry.strip():
            raise ValueError(f"Invalid page entry: {entry!r}")
        url = entry.strip()
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError(f"Page URL must be absolute http(s): {url}")
        if url in seen:
            continue
        seen.add(url)
        pages.append(url)
    return pages
