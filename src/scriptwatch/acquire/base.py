"""PageSource protocol — all acquisition backends must satisfy this."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from scriptwatch.inventory.models import PageSnapshot


class AcquisitionError(Exception):
    """A page could not be loaded or inspected."""

    def __init__(self, page_url: str, reason: str) -> None:
        super().__init__(f"{page_url}: {reason}")
        self.page_url = page_url
        self.reason = reason


@runtime_checkable
class PageSource(Protocol):
    """Protocol for page acquisition backends."""

    def capture(self, page_url: str) -> PageSnapshot:
        """Load a page and return its finalized script inventory.

        Raises AcquisitionError if the page cannot be scanned.
        """
        ...
