"""Scan runner — drives a PageSource over a list of pages."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import date

from scriptwatch.acquire.base import AcquisitionError, PageSource
from scriptwatch.inventory.models import PageSnapshot, ScanResult
from scriptwatch.inventory.snapshot import utc_now_iso

logger = logging.getLogger(__name__)


def run_scan(
    urls: Iterable[str],
    source: PageSource,
    on_page: Callable[[str, PageSnapshot | None], None] | None = None,
) -> ScanResult:
    """Capture each page in turn and aggregate the results.

    Pages that fail, either to load (``AcquisitionError``) or to be turned
    into a snapshot (``ValueError``), are logged and left out; the scan
    carries on with the remaining pages. ``on_page`` is called after every attempt with the
    snapshot, or ``None`` on failure.
    """
    pages: list[PageSnapshot] = []

    for url in urls:
        logger.info("Scanning %s", url)
        try:
            snapshot = source.capture(url)
        except (AcquisitionError, ValueError) as e:
            reason = e.reason if isinstance(e, AcquisitionError) else str(e)
            logger.warning("Skipping %s: %s", url, reason)
            if on_page:
                on_page(url, None)
            continue

        logger.info(
            "Finished %s: %d scripts, %d header records",
            url,
            len(snapshot.scripts),
            len(snapshot.headers),
        )
        pages.append(snapshot)
        if on_page:
            on_page(url, snapshot)

    return ScanResult(scanned_at=utc_now_iso(), pages=tuple(pages))


def default_scan_filename(day: date | None = None) -> str:
    day = day or date.today()
    return f"scan-{day.isoformat()}.json"
