"""Snapshot building — enrich raw page observations into PageSnapshots.

Acquisition backends only report what they saw (each script tag's ``src``
attribute and body, each response's header pairs). Fingerprinting and
origin classification happen here so every backend produces identical
records for identical pages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timezone

from scriptwatch.inventory.fingerprint import fingerprint
from scriptwatch.inventory.models import HeaderRecord, PageSnapshot, ScriptRecord
from scriptwatch.inventory.origin import classify


@dataclass(frozen=True)
class RawScript:
    """A script tag as found in the DOM, before enrichment."""

    src: str | None
    text: str = ""


@dataclass(frozen=True)
class RawResponse:
    """A captured document or script response."""

    url: str
    header_pairs: tuple[tuple[str, str], ...] = field(default_factory=tuple)


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def normalize_headers(pairs: Iterable[tuple[str, str]]) -> dict[str, str]:
    """Lowercase header names and join repeated headers with a comma."""
    headers: dict[str, str] = {}
    for name, value in pairs:
        key = name.lower()
        if key in headers:
            headers[key] = f"{headers[key]},{value}"
        else:
            headers[key] = value
    return headers


def build_script_record(page_url: str, raw: RawScript, position: int) -> ScriptRecord:
    """Fingerprint and classify one script tag."""
    script_url = raw.src or None
    return ScriptRecord(
        page_url=page_url,
        script_url=script_url,
        inline_hash=fingerprint(raw.text) if script_url is None else None,
        origin=classify(page_url, script_url),
        tag_position=position,
    )


def build_page_snapshot(
    page_url: str,
    scripts: Iterable[RawScript],
    responses: Iterable[RawResponse] = (),
    timestamp: str | None = None,
) -> PageSnapshot:
    """Turn raw observations of one page into a fully populated PageSnapshot.

    ``scripts`` must be in document order; positions are assigned from 0.
    """
    records = tuple(
        build_script_record(page_url, raw, position)
        for position, raw in enumerate(scripts)
    )
    headers = tuple(
        HeaderRecord(
            page_url=page_url,
            url=resp.url,
            headers=normalize_headers(resp.header_pairs),
        )
        for resp in responses
    )
    return PageSnapshot(
        page_url=page_url,
        timestamp=timestamp or utc_now_iso(),
        scripts=records,
        headers=headers,
    )
