"""Load and save ScanResult documents as JSON.

The persisted layout uses the camelCase field names of the original scan
files (``scannedAt``, ``pages[].scripts[].tagPosition`` ...), so scans
written by earlier tooling load unchanged. Unknown keys are ignored.
"""

from __future__ import annotations

import json
from pathlib import Path

from scriptwatch.inventory.models import (
    HeaderRecord,
    Origin,
    PageSnapshot,
    ScanResult,
    ScriptRecord,
)


class SnapshotFormatError(ValueError):
    """A persisted scan document does not match the ScanResult schema."""


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


def script_to_dict(record: ScriptRecord) -> dict:
    data: dict = {
        "pageUrl": record.page_url,
        "scriptUrl": record.script_url,
        "isInline": record.is_inline,
        "origin": record.origin.value,
        "tagPosition": record.tag_position,
    }
    if record.inline_hash is not None:
        data["inlineHash"] = record.inline_hash
    return data


def scan_to_dict(scan: ScanResult) -> dict:
    return {
        "scannedAt": scan.scanned_at,
        "pages": [
            {
                "pageUrl": page.page_url,
                "timestamp": page.timestamp,
                "scripts": [script_to_dict(s) for s in page.scripts],
                "headers": [
                    {"pageUrl": h.page_url, "url": h.url, "headers": dict(h.headers)}
                    for h in page.headers
                ],
            }
            for page in scan.pages
        ],
    }


def dumps_scan(scan: ScanResult) -> str:
    return json.dumps(scan_to_dict(scan), indent=2, ensure_ascii=False)


def save_scan(scan: ScanResult, path: str | Path) -> Path:
    """Write a scan to ``path``, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(dumps_scan(scan) + "\n", encoding="utf-8")
    return path


# ---------------------------------------------------------------------------
# Deserialization
# ---------------------------------------------------------------------------


def load_scan(path: str | Path) -> ScanResult:
    """Load a scan from a JSON file. Raises SnapshotFormatError if malformed."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SnapshotFormatError(f"Not UTF-8 text: {e}") from e
    return loads_scan(text)


def loads_scan(text: str) -> ScanResult:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise SnapshotFormatError(f"Invalid JSON: {e}") from e
    return scan_from_dict(data)


def scan_from_dict(data: object) -> ScanResult:
    if not isinstance(data, dict):
        raise SnapshotFormatError("Scan document must be a JSON object")

    scanned_at = _require(data, "scannedAt", str, "scan")
    pages_raw = _require(data, "pages", list, "scan")

    pages = tuple(
        _build_page(p, f"pages[{i}]") for i, p in enumerate(pages_raw)
    )
    return ScanResult(scanned_at=scanned_at, pages=pages)


def _build_page(data: object, where: str) -> PageSnapshot:
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"{where}: page must be an object")

    page_url = _require(data, "pageUrl", str, where)
    timestamp = _require(data, "timestamp", str, where)
    scripts_raw = _require(data, "scripts", list, where)

    # Older scans may lack headers entirely
    headers_raw = data.get("headers", [])
    if headers_raw is None:
        headers_raw = []
    if not isinstance(headers_raw, list):
        raise SnapshotFormatError(f"{where}.headers: expected a list")

    scripts = tuple(
        _build_script(s, f"{where}.scripts[{i}]") for i, s in enumerate(scripts_raw)
    )
    for i, script in enumerate(scripts):
        if script.page_url != page_url:
            raise SnapshotFormatError(
                f"{where}.scripts[{i}].pageUrl: {script.page_url!r} does not match "
                f"page {page_url!r}"
            )
    headers = tuple(
        _build_header(h, f"{where}.headers[{i}]") for i, h in enumerate(headers_raw)
    )
    return PageSnapshot(
        page_url=page_url,
        timestamp=timestamp,
        scripts=scripts,
        headers=headers,
    )


def _build_script(data: object, where: str) -> ScriptRecord:
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"{where}: script must be an object")

    page_url = _require(data, "pageUrl", str, where)
    script_url = _optional_str(data, "scriptUrl", where)
    inline_hash = _optional_str(data, "inlineHash", where)
    origin_raw = _require(data, "origin", str, where)
    position = data.get("tagPosition")

    # bool is an int subclass; reject it explicitly
    if not isinstance(position, int) or isinstance(position, bool):
        raise SnapshotFormatError(f"{where}.tagPosition: expected an integer")

    try:
        origin = Origin(origin_raw)
    except ValueError:
        raise SnapshotFormatError(
            f"{where}.origin: unknown origin {origin_raw!r}"
        ) from None

    is_inline = data.get("isInline")
    if is_inline is not None and is_inline != (script_url is None):
        raise SnapshotFormatError(
            f"{where}.isInline: {is_inline!r} contradicts scriptUrl {script_url!r}"
        )

    try:
        return ScriptRecord(
            page_url=page_url,
            script_url=script_url,
            inline_hash=inline_hash,
            origin=origin,
            tag_position=position,
        )
    except ValueError as e:
        raise SnapshotFormatError(f"{where}: {e}") from e


def _build_header(data: object, where: str) -> HeaderRecord:
    if not isinstance(data, dict):
        raise SnapshotFormatError(f"{where}: header record must be an object")

    headers = _require(data, "headers", dict, where)
    for name, value in headers.items():
        if not isinstance(value, str):
            raise SnapshotFormatError(
                f"{where}.headers[{name!r}]: expected a string value"
            )
    return HeaderRecord(
        page_url=_require(data, "pageUrl", str, where),
        url=_require(data, "url", str, where),
        headers=dict(headers),
    )


def _require(data: dict, key: str, kind: type, where: str):
    if key not in data:
        raise SnapshotFormatError(f"{where}: missing required field {key!r}")
    value = data[key]
    if not isinstance(value, kind):
        raise SnapshotFormatError(
            f"{where}.{key}: expected {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _optional_str(data: dict, key: str, where: str) -> str | None:
    """Read an optional string field; null, missing and "" are all absent."""
    value = data.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise SnapshotFormatError(f"{where}.{key}: expected a string or null")
    return value
