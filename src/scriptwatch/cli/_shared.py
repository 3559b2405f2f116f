"""Helpers shared by CLI commands."""

from __future__ import annotations

import sys

from rich.console import Console
from rich.markup import escape

from scriptwatch.inventory.codec import SnapshotFormatError, load_scan
from scriptwatch.inventory.models import ScanResult

console = Console(stderr=True)


def load_scan_or_exit(path: str) -> ScanResult:
    """Load a persisted scan, exiting with status 1 if it is unreadable."""
    try:
        return load_scan(path)
    except SnapshotFormatError as e:
        console.print(
            f"[red]Error:[/red] {escape(path)}: malformed scan: {escape(str(e))}",
            soft_wrap=True,
        )
        sys.exit(1)
    except OSError as e:
        console.print(
            f"[red]Error:[/red] cannot read {escape(path)}: {escape(str(e))}",
            soft_wrap=True,
        )
        sys.exit(1)
