"""Inventory data models — immutable snapshots of the scripts on a set of pages."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Origin(enum.Enum):
    """Where a script is served from, relative to the page that loads it."""

    FIRST_PARTY = "first-party"
    THIRD_PARTY = "third-party"
    UNKNOWN = "unknown"


def absent_as_empty(value: str | None) -> str:
    """Normalize an optional field for comparison: ``None`` becomes ``""``."""
    return value if value is not None else ""


@dataclass(frozen=True)
class ScriptRecord:
    """One ``<script>`` element observed on one page at scan time.

    ``script_url`` is ``None`` for inline scripts, which instead carry the
    SHA-256 of their body in ``inline_hash``. ``tag_position`` is the
    zero-based ordinal among all script tags in document order; it is unique
    within a page for one scan but not stable across scans.
    """

    page_url: str
    script_url: str | None
    inline_hash: str | None
    origin: Origin
    tag_position: int

    def __post_init__(self) -> None:
        if self.tag_position < 0:
            raise ValueError(f"tag_position must be >= 0, got {self.tag_position}")
        # None is the only absent value
        if self.script_url == "":
            raise ValueError("script_url must be None, not an empty string, when absent")
        if self.inline_hash == "":
            raise ValueError("inline_hash must be None, not an empty string, when absent")
        if (self.script_url is None) != (self.inline_hash is not None):
            raise ValueError(
                "inline_hash must be set exactly when script_url is absent "
                f"(script_url={self.script_url!r}, inline_hash={self.inline_hash!r})"
            )

    @property
    def is_inline(self) -> bool:
        return self.script_url is None


@dataclass(frozen=True)
class HeaderRecord:
    """Response headers for the main document or one script request."""

    page_url: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class PageSnapshot:
    """One page's observation: its scripts in document order and headers."""

    page_url: str
    timestamp: str
    scripts: tuple[ScriptRecord, ...] = ()
    headers: tuple[HeaderRecord, ...] = ()


@dataclass(frozen=True)
class ScanResult:
    """The outcome of one scan run over one or more pages."""

    scanned_at: str
    pages: tuple[PageSnapshot, ...] = ()

    @property
    def script_count(self) -> int:
        return sum(len(p.scripts) for p in self.pages)

    def iter_scripts(self):
        """Yield ``(page, script)`` pairs in page order, then document order."""
        for page in self.pages:
            for script in page.scripts:
                yield page, script
