"""Script indexer — composite keys that correlate script slots across scans."""

from __future__ import annotations

from scriptwatch.inventory.models import ScanResult, ScriptRecord, absent_as_empty

KEY_SEPARATOR = "||"
INLINE_MARKER = "INLINE"


def script_key(page_url: str, record: ScriptRecord) -> str:
    """Build the composite key ``page||url-or-INLINE||position``.

    The position is part of the key, so a script that moves between scans
    gets a different key in each.
    """
    ref = absent_as_empty(record.script_url) or INLINE_MARKER
    return f"{page_url}{KEY_SEPARATOR}{ref}{KEY_SEPARATOR}{record.tag_position}"


def index_scan(scan: ScanResult) -> dict[str, ScriptRecord]:
    """Map every script in a scan to its composite key.

    Iteration order follows page order, then document order. Duplicate keys
    keep the later record.
    """
    index: dict[str, ScriptRecord] = {}
    for page, record in scan.iter_scripts():
        index[script_key(page.page_url, record)] = record
    return index
