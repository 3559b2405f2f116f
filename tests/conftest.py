"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from scriptwatch.inventory.fingerprint import fingerprint
from scriptwatch.inventory.models import Origin, PageSnapshot, ScanResult, ScriptRecord

PAGE = "https://pay.x/"


@pytest.fixture
def fixtures_dir() -> Path:
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def make_script():
    """Factory for ScriptRecords; leave ``url`` unset for an inline script."""

    def _make(
        position: int,
        url: str | None = None,
        body: str = "",
        origin: Origin | None = None,
        page_url: str = PAGE,
    ) -> ScriptRecord:
        if url is None:
            return ScriptRecord(
                page_url=page_url,
                script_url=None,
                inline_hash=fingerprint(body),
                origin=origin or Origin.UNKNOWN,
                tag_position=position,
            )
        return ScriptRecord(
            page_url=page_url,
            script_url=url,
            inline_hash=None,
            origin=origin or Origin.FIRST_PARTY,
            tag_position=position,
        )

    return _make


@pytest.fixture
def make_scan():
    """Factory for a ScanResult from ``{page_url: [records]}``."""

    def _make(
        pages: dict[str, list[ScriptRecord]],
        scanned_at: str = "2026-01-01T00:00:00+00:00",
    ) -> ScanResult:
        return ScanResult(
            scanned_at=scanned_at,
            pages=tuple(
                PageSnapshot(page_url=url, timestamp=scanned_at, scripts=tuple(scripts))
                for url, scripts in pages.items()
            ),
        )

    return _make


@pytest.fixture
def old_scan(make_script, make_scan) -> ScanResult:
    return make_scan({PAGE: [make_script(0, url="https://pay.x/a.js")]})


@pytest.fixture
def new_scan(make_script, make_scan) -> ScanResult:
    return make_scan(
        {
            PAGE: [
                make_script(0, url="https://pay.x/a.js"),
                make_script(1, body="console.log(1)"),
            ]
        },
        scanned_at="2026-01-02T00:00:00+00:00",
    )
