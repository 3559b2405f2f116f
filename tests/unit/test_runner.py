"""Tests for the scan runner, using fake page sources."""

from __future__ import annotations

from datetime import date

from scriptwatch.acquire.base import AcquisitionError, PageSource
from scriptwatch.acquire.runner import default_scan_filename, run_scan
from scriptwatch.inventory.models import Origin, PageSnapshot, ScriptRecord
from scriptwatch.inventory.snapshot import RawScript, build_page_snapshot


class FakeSource:
    """Returns canned pages; URLs listed in ``failing`` raise AcquisitionError."""

    def __init__(self, failing: set[str] | None = None) -> None:
        self.failing = failing or set()
        self.calls: list[str] = []

    def capture(self, page_url: str) -> PageSnapshot:
        self.calls.append(page_url)
        if page_url in self.failing:
            raise AcquisitionError(page_url, "net::ERR_NAME_NOT_RESOLVED")
        return build_page_snapshot(
            page_url,
            [RawScript(src="/app.js"), RawScript(src=None, text="x")],
        )


URLS = ["https://a.example/", "https://b.example/", "https://c.example/"]


def test_fake_source_satisfies_protocol():
    assert isinstance(FakeSource(), PageSource)


def test_all_pages_scanned_in_order():
    source = FakeSource()
    result = run_scan(URLS, source)
    assert [p.page_url for p in result.pages] == URLS
    assert source.calls == URLS
    assert result.script_count == 6
    assert result.scanned_at


def test_failed_page_skipped(caplog):
    source = FakeSource(failing={"https://b.example/"})
    with caplog.at_level("WARNING"):
        result = run_scan(URLS, source)

    assert [p.page_url for p in result.pages] == ["https://a.example/", "https://c.example/"]
    assert source.calls == URLS
    assert "https://b.example/" in caplog.text


def test_all_pages_failing_gives_empty_scan():
    result = run_scan(URLS, FakeSource(failing=set(URLS)))
    assert result.pages == ()


def test_progress_callback():
    seen: list[tuple[str, bool]] = []
    run_scan(
        URLS,
        FakeSource(failing={"https://c.example/"}),
        on_page=lambda url, snap: seen.append((url, snap is not None)),
    )
    assert seen == [
        ("https://a.example/", True),
        ("https://b.example/", True),
        ("https://c.example/", False),
    ]


def test_acquisition_error_message():
    err = AcquisitionError("https://a.example/", "timeout")
    assert err.page_url == "https://a.example/"
    assert err.reason == "timeout"
    assert str(err) == "https://a.example/: timeout"


def test_default_scan_filename():
    assert default_scan_filename(date(2026, 3, 9)) == "scan-2026-03-09.json"


class BrokenSnapshotSource(FakeSource):
    """Page b loads, but its content cannot be turned into a snapshot."""

    def capture(self, page_url: str) -> PageSnapshot:
        if page_url == "https://b.example/":
            self.calls.append(page_url)
            ScriptRecord(
                page_url=page_url,
                script_url=None,
                inline_hash=None,
                origin=Origin.UNKNOWN,
                tag_position=0,
            )
        return super().capture(page_url)


def test_snapshot_error_skips_only_that_page(caplog):
    source = BrokenSnapshotSource()
    with caplog.at_level("WARNING"):
        result = run_scan(URLS, source)

    assert [p.page_url for p in result.pages] == ["https://a.example/", "https://c.example/"]
    assert "inline_hash" in caplog.text


def test_surrogate_in_inline_body_does_not_abort_scan():
    class SurrogateSource(FakeSource):
        def capture(self, page_url: str) -> PageSnapshot:
            if page_url == "https://b.example/":
                return build_page_snapshot(page_url, [RawScript(src=None, text="x\udc00")])
            return super().capture(page_url)

    result = run_scan(URLS, SurrogateSource())
    assert len(result.pages) == 3
    assert result.pages[1].scripts[0].inline_hash
