"""Rich terminal rendering for scans and diffs."""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from scriptwatch.inventory.differ import ChangeType, DiffItem, DiffSummary
from scriptwatch.inventory.index import INLINE_MARKER
from scriptwatch.inventory.models import Origin, ScanResult

_ORIGIN_COLORS = {
    Origin.FIRST_PARTY: "green",
    Origin.THIRD_PARTY: "yellow",
    Origin.UNKNOWN: "dim",
}

_CHANGE_COLORS = {
    ChangeType.NEW: "green",
    ChangeType.CHANGED: "yellow",
    ChangeType.REMOVED: "red",
}


def scan_table(scan: ScanResult) -> Table:
    table = Table(title=f"Scripts ({escape(scan.scanned_at)})", show_lines=False)
    table.add_column("Page", style="cyan")
    table.add_column("Script", max_width=60)
    table.add_column("Origin")
    table.add_column("Pos", justify="right")
    table.add_column("Inline Hash", max_width=16)

    for page, script in scan.iter_scripts():
        color = _ORIGIN_COLORS.get(script.origin, "white")
        table.add_row(
            escape(page.page_url),
            escape(script.script_url or INLINE_MARKER),
            f"[{color}]{script.origin.value}[/{color}]",
            str(script.tag_position),
            (script.inline_hash or "")[:16],
        )
    return table


def diff_table(items: list[DiffItem]) -> Table:
    table = Table(title="Script changes", show_lines=False)
    table.add_column("Change", style="bold", width=8)
    table.add_column("Page", style="cyan")
    table.add_column("Script", max_width=60)
    table.add_column("Pos", justify="right")

    for item in items:
        record = item.new_record or item.old_record
        color = _CHANGE_COLORS.get(item.change_type, "white")
        table.add_row(
            f"[{color}]{item.change_type.value}[/{color}]",
            escape(item.page_url),
            escape(record.script_url or INLINE_MARKER),
            str(record.tag_position),
        )
    return table


def print_scan(console: Console, scan: ScanResult) -> None:
    console.print(scan_table(scan))
    console.print(f"\n{len(scan.pages)} page(s), {scan.script_count} script(s)")


def print_diff_summary(console: Console, summary: DiffSummary) -> None:
    if summary.total == 0:
        console.print("[green]No script changes.[/green]")
        return
    console.print(
        f"[green]{summary.new} new[/green], "
        f"[yellow]{summary.changed} changed[/yellow], "
        f"[red]{summary.removed} removed[/red] "
        f"across {len(summary.pages)} page(s)"
    )
