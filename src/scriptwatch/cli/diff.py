"""CLI command: scriptwatch diff <old> <new> — compare two scans."""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click
from rich.markup import escape

from scriptwatch.cli._shared import console, load_scan_or_exit
from scriptwatch.inventory.differ import diff_scans, summarize
from scriptwatch.report.console import diff_table, print_diff_summary
from scriptwatch.report.html import render_diff_html


@click.command()
@click.argument("old", type=click.Path(exists=True, dir_okay=False))
@click.argument("new", type=click.Path(exists=True, dir_okay=False))
@click.option(
    "--html",
    "html_path",
    type=click.Path(dir_okay=False),
    default=None,
    help="Also write an HTML change report to this path.",
)
@click.option("--table", is_flag=True, help="Print the changes as a table on stderr.")
@click.option(
    "--exit-code",
    is_flag=True,
    help="Exit with status 1 when any script changed.",
)
def diff(
    old: str,
    new: str,
    html_path: str | None,
    table: bool,
    exit_code: bool,
) -> None:
    """Compare two scans and print new, changed and removed scripts as JSON."""
    old_scan = load_scan_or_exit(old)
    new_scan = load_scan_or_exit(new)

    items = diff_scans(old_scan, new_scan)
    click.echo(json.dumps([item.to_dict() for item in items], indent=2))

    if table and items:
        console.print(diff_table(items))
    print_diff_summary(console, summarize(items))

    if html_path:
        out = Path(html_path)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(render_diff_html(items, old_scan, new_scan), encoding="utf-8")
        console.print(
            f"[green]Diff report written to {escape(str(out))}[/green]", soft_wrap=True
        )

    if exit_code and items:
        sys.exit(1)
