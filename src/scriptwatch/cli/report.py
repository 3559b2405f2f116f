"""CLI command: scriptwatch report <scan> <output> — HTML inventory report."""

from __future__ import annotations

from pathlib import Path

import click
from rich.markup import escape

from scriptwatch.cli._shared import console, load_scan_or_exit
from scriptwatch.report.console import print_scan
from scriptwatch.report.html import render_scan_html


@click.command()
@click.argument("scan_path", metavar="SCAN", type=click.Path(exists=True, dir_okay=False))
@click.argument("output", type=click.Path(dir_okay=False))
@click.option("--console", "show", is_flag=True, help="Also print the inventory table.")
def report(scan_path: str, output: str, show: bool) -> None:
    """Render a persisted scan as an HTML report."""
    scan = load_scan_or_exit(scan_path)

    out = Path(output)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(render_scan_html(scan), encoding="utf-8")

    if show:
        print_scan(console, scan)
    console.print(f"[green]Report written to {escape(str(out))}[/green]", soft_wrap=True)
