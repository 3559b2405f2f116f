"""HTML reports for scans and diffs.

Every value taken from a scan (page URLs, script URLs, header values) is
escaped before it is embedded in the document.
"""

from __future__ import annotations

from html import escape

from scriptwatch.inventory.differ import ChangeType, DiffItem, summarize
from scriptwatch.inventory.index import INLINE_MARKER
from scriptwatch.inventory.models import ScanResult, ScriptRecord, absent_as_empty

_STYLE = """
    body {
      font-family: system-ui, -apple-system, "Segoe UI", sans-serif;
      margin: 20px;
      color: #222;
    }
    h1, h2 { margin-bottom: 0.2rem; }
    .meta { margin-bottom: 1.5rem; font-size: 0.95rem; color: #555; }
    table { border-collapse: collapse; width: 100%; font-size: 0.9rem; }
    th, td { border: 1px solid #ddd; padding: 6px 8px; vertical-align: top; }
    th { background: #f4f4f4; text-align: left; }
    tr:nth-child(even) { background: #fafafa; }
    code {
      font-family: Menlo, Consolas, "Liberation Mono", monospace;
      font-size: 0.8rem;
      word-break: break-all;
    }
    .change-new { color: #1a7f37; font-weight: bold; }
    .change-removed { color: #b42318; font-weight: bold; }
    .change-changed { color: #9a6700; font-weight: bold; }
"""

_SCRIPT_COLUMNS = ("Page URL", "Script URL", "Origin", "Tag Position", "Inline Hash")


def _document(title: str, body: str) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html lang="en">\n'
        "<head>\n"
        '  <meta charset="UTF-8" />\n'
        f"  <title>{escape(title)}</title>\n"
        f"  <style>{_STYLE}  </style>\n"
        "</head>\n"
        "<body>\n"
        f"{body}"
        "</body>\n"
        "</html>\n"
    )


def _header_row(columns: tuple[str, ...]) -> str:
    cells = "".join(f"<th>{escape(c)}</th>" for c in columns)
    return f"      <tr>{cells}</tr>\n"


def _script_cells(page_url: str, record: ScriptRecord) -> str:
    script_url = record.script_url or INLINE_MARKER
    inline_hash = absent_as_empty(record.inline_hash)
    return (
        f"<td>{escape(page_url)}</td>"
        f"<td>{escape(script_url)}</td>"
        f"<td>{escape(record.origin.value)}</td>"
        f"<td>{record.tag_position}</td>"
        f"<td><code>{escape(inline_hash)}</code></td>"
    )


def render_scan_html(scan: ScanResult) -> str:
    """Render a full inventory report for one scan."""
    rows = "".join(
        f"      <tr>{_script_cells(page.page_url, script)}</tr>\n"
        for page, script in scan.iter_scripts()
    )

    body = (
        "  <h1>Payment Page Script Scan Report</h1>\n"
        '  <div class="meta">\n'
        f"    <div><strong>Scanned at:</strong> {escape(scan.scanned_at)}</div>\n"
        f"    <div><strong>Pages scanned:</strong> {len(scan.pages)}</div>\n"
        f"    <div><strong>Total scripts:</strong> {scan.script_count}</div>\n"
        "  </div>\n"
        "  <h2>Scripts</h2>\n"
        "  <table>\n"
        "    <thead>\n"
        f"{_header_row(_SCRIPT_COLUMNS)}"
        "    </thead>\n"
        "    <tbody>\n"
        f"{rows}"
        "    </tbody>\n"
        "  </table>\n"
        f"{_headers_section(scan)}"
    )
    return _document("Payment Page Script Scan Report", body)


def _headers_section(scan: ScanResult) -> str:
    rows = []
    for page in scan.pages:
        for record in page.headers:
            values = "<br />".join(
                f"<code>{escape(name)}: {escape(value)}</code>"
                for name, value in sorted(record.headers.items())
            )
            rows.append(
                f"      <tr><td>{escape(record.page_url)}</td>"
                f"<td>{escape(record.url)}</td><td>{values}</td></tr>\n"
            )
    if not rows:
        return ""
    return (
        "  <h2>Response Headers</h2>\n"
        "  <table>\n"
        "    <thead>\n"
        f"{_header_row(('Page URL', 'Resource URL', 'Headers'))}"
        "    </thead>\n"
        "    <tbody>\n"
        f"{''.join(rows)}"
        "    </tbody>\n"
        "  </table>\n"
    )


def render_diff_html(
    items: list[DiffItem],
    old_scan: ScanResult | None = None,
    new_scan: ScanResult | None = None,
) -> str:
    """Render a change report between two scans.

    The scans only supply the timestamps shown in the header; either may be
    omitted.
    """
    old_scanned_at = old_scan.scanned_at if old_scan is not None else ""
    new_scanned_at = new_scan.scanned_at if new_scan is not None else ""
    summary = summarize(items)
    rows = []
    for item in items:
        # Removed items only carry the old record
        record = item.new_record or item.old_record
        previous = ""
        if item.change_type == ChangeType.CHANGED and item.old_record is not None:
            previous = (
                f"{escape(item.old_record.script_url or INLINE_MARKER)} / "
                f"{escape(item.old_record.origin.value)} / "
                f"<code>{escape(absent_as_empty(item.old_record.inline_hash))}</code>"
            )
        change = item.change_type.value
        rows.append(
            f'      <tr><td class="change-{change}">{change}</td>'
            f"{_script_cells(item.page_url, record)}"
            f"<td>{previous}</td></tr>\n"
        )

    if rows:
        table = (
            "  <table>\n"
            "    <thead>\n"
            f"{_header_row(('Change',) + _SCRIPT_COLUMNS + ('Previous',))}"
            "    </thead>\n"
            "    <tbody>\n"
            f"{''.join(rows)}"
            "    </tbody>\n"
            "  </table>\n"
        )
    else:
        table = "  <p>No script changes detected.</p>\n"

    body = (
        "  <h1>Payment Page Script Changes</h1>\n"
        '  <div class="meta">\n'
        f"    <div><strong>Old scan:</strong> {escape(old_scanned_at)}</div>\n"
        f"    <div><strong>New scan:</strong> {escape(new_scanned_at)}</div>\n"
        f"    <div><strong>New:</strong> {summary.new} &middot; "
        f"<strong>Changed:</strong> {summary.changed} &middot; "
        f"<strong>Removed:</strong> {summary.removed}</div>\n"
        f"    <div><strong>Pages affected:</strong> {len(summary.pages)}</div>\n"
        "  </div>\n"
        f"{table}"
    )
    return _document("Payment Page Script Changes", body)
