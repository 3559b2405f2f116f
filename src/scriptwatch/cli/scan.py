"""CLI command: scriptwatch scan [URL...] — inventory scripts on live pages."""

from __future__ import annotations

import sys
from pathlib import Path

import click
import yaml
from rich.markup import escape

from scriptwatch.acquire.browser import BrowserSource
from scriptwatch.acquire.runner import default_scan_filename, run_scan
from scriptwatch.cli._shared import console
from scriptwatch.config import ScriptWatchConfig
from scriptwatch.inventory.codec import save_scan
from scriptwatch.inventory.models import PageSnapshot
from scriptwatch.pages import load_pages, validate_urls


@click.command()
@click.argument("urls", nargs=-1)
@click.option(
    "--pages",
    "pages_file",
    type=click.Path(exists=True, dir_okay=False),
    default=None,
    help="YAML file listing the pages to scan.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Where to write the scan JSON.",
)
@click.option(
    "--wait-ms",
    type=int,
    default=None,
    help="How long to watch for injected scripts after load.",
)
@click.option("--no-headless", is_flag=True, help="Show the browser window.")
def scan(
    urls: tuple[str, ...],
    pages_file: str | None,
    output: str | None,
    wait_ms: int | None,
    no_headless: bool,
) -> None:
    """Scan pages in a headless browser and record their scripts."""
    config = ScriptWatchConfig.load()

    try:
        if urls:
            targets = validate_urls(list(urls))
        elif pages_file:
            targets = load_pages(pages_file)
        elif config.pages_file.is_file():
            targets = load_pages(config.pages_file)
        else:
            targets = []
    except (ValueError, yaml.YAMLError, OSError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}", soft_wrap=True)
        sys.exit(1)

    if not targets:
        console.print(
            "[red]Error:[/red] no pages to scan. Pass URLs, --pages FILE, "
            f"or create {escape(str(config.pages_file))}",
            soft_wrap=True,
        )
        sys.exit(1)

    out_path = Path(output) if output else config.scans_dir / default_scan_filename()

    def _progress(url: str, snapshot: PageSnapshot | None) -> None:
        if snapshot is None:
            console.print(f"  [red]failed[/red]  {escape(url)}")
        else:
            console.print(
                f"  [green]ok[/green]      {escape(url)} "
                f"[dim]({len(snapshot.scripts)} scripts, "
                f"{len(snapshot.headers)} header records)[/dim]"
            )

    console.print(f"[bold]scriptwatch[/bold] scanning {len(targets)} page(s)\n")

    with BrowserSource(
        wait_ms=wait_ms if wait_ms is not None else config.scan_wait_ms,
        nav_timeout_ms=config.nav_timeout_ms,
        headless=config.headless and not no_headless,
    ) as source:
        result = run_scan(targets, source, on_page=_progress)

    save_scan(result, out_path)
    console.print(
        f"\n{len(result.pages)}/{len(targets)} page(s) scanned, "
        f"{result.script_count} script(s)"
    )
    console.print(
        f"[green]Scan written to {escape(str(out_path))}[/green]", soft_wrap=True
    )
