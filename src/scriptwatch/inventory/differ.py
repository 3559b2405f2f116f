"""Snapshot differ — classifies script changes between two scans."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field

from scriptwatch.inventory.codec import script_to_dict
from scriptwatch.inventory.index import index_scan
from scriptwatch.inventory.models import ScanResult, ScriptRecord, absent_as_empty


class ChangeType(enum.Enum):
    """How a script slot differs between the old and new scan."""

    NEW = "new"
    REMOVED = "removed"
    CHANGED = "changed"


@dataclass(frozen=True)
class DiffItem:
    """One reported change, keyed by the composite script key."""

    page_url: str
    script_id: str
    change_type: ChangeType
    old_record: ScriptRecord | None = None
    new_record: ScriptRecord | None = None

    def to_dict(self) -> dict:
        """Structured form, using the same field names as persisted scans."""
        data: dict = {
            "pageUrl": self.page_url,
            "scriptId": self.script_id,
            "changeType": self.change_type.value,
        }
        if self.old_record is not None:
            data["oldRecord"] = script_to_dict(self.old_record)
        if self.new_record is not None:
            data["newRecord"] = script_to_dict(self.new_record)
        return data


@dataclass
class DiffSummary:
    """Counts per change type across a diff."""

    new: int = 0
    removed: int = 0
    changed: int = 0
    pages: set[str] = field(default_factory=set)

    @property
    def total(self) -> int:
        return self.new + self.removed + self.changed


def records_differ(old: ScriptRecord, new: ScriptRecord) -> bool:
    """Compare the fields that identify a script's content and source.

    ``tag_position`` is not compared; it is part of the key.
    """
    return (
        absent_as_empty(old.script_url) != absent_as_empty(new.script_url)
        or absent_as_empty(old.inline_hash) != absent_as_empty(new.inline_hash)
        or old.origin != new.origin
    )


def diff_scans(old: ScanResult, new: ScanResult) -> list[DiffItem]:
    """Compare two scans and return new, changed and removed scripts.

    New and changed items come first in the new scan's order, followed by
    removed items in the old scan's order. Unchanged scripts are omitted.
    """
    old_index = index_scan(old)
    new_index = index_scan(new)
    items: list[DiffItem] = []

    for key, new_record in new_index.items():
        old_record = old_index.get(key)
        if old_record is None:
            items.append(
                DiffItem(
                    page_url=new_record.page_url,
                    script_id=key,
                    change_type=ChangeType.NEW,
                    new_record=new_record,
                )
            )
        elif records_differ(old_record, new_record):
            items.append(
                DiffItem(
                    page_url=new_record.page_url,
                    script_id=key,
                    change_type=ChangeType.CHANGED,
                    old_record=old_record,
                    new_record=new_record,
                )
            )

    for key, old_record in old_index.items():
        if key not in new_index:
            items.append(
                DiffItem(
                    page_url=old_record.page_url,
                    script_id=key,
                    change_type=ChangeType.REMOVED,
                    old_record=old_record,
                )
            )

    return items


def summarize(items: list[DiffItem]) -> DiffSummary:
    summary = DiffSummary()
    for item in items:
        if item.change_type == ChangeType.NEW:
            summary.new += 1
        elif item.change_type == ChangeType.REMOVED:
            summary.removed += 1
        else:
            summary.changed += 1
        summary.pages.add(item.page_url)
    return summary
