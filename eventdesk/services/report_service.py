"""
Reports and plain-text exports.

Reports are built as rows first and rendered separately, so the console and
the export files share the same numbers.
"""

from dataclasses import dataclass, field
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from eventdesk.core.errors import PersistenceError
from eventdesk.core.logging import get_logger
from eventdesk.models import NO_EVENT
from eventdesk.services.attendee_service import list_attendees
from eventdesk.services.inventory_service import UNKNOWN
from eventdesk.store.entity_store import EntityStore

logger = get_logger(__name__)

RULE = "-" * 48


@dataclass
class AttendanceRow:
    event_id: int
    event_name: str
    total: int
    checked_in: int


@dataclass
class InventoryRow:
    item_id: int
    name: str
    total: int
    allocated: int
    available: int
    events: list[str] = field(default_factory=list)


def attendance_report(store: EntityStore) -> list[AttendanceRow]:
    """One row per event that has at least one attendee."""
    rows = []
    for event in store.events:
        if not event.attendee_ids:
            continue
        checked_in = 0
        for attendee_id in event.attendee_ids:
            attendee = store.attendees.find_by_id(attendee_id)
            if attendee and attendee.is_checked_in:
                checked_in += 1
        rows.append(AttendanceRow(event.id, event.name, len(event.attendee_ids), checked_in))
    return rows


def inventory_report(store: EntityStore) -> list[InventoryRow]:
    rows = []
    for item in store.inventory:
        events = [
            f"{e.name} ({e.allocated_inventory[item.item_id]})"
            for e in store.events
            if item.item_id in e.allocated_inventory
        ]
        rows.append(InventoryRow(
            item.item_id,
            item.name,
            item.total_quantity,
            item.allocated_quantity,
            item.available_quantity,
            events,
        ))
    return rows


def render_attendance_report(rows: list[AttendanceRow]) -> str:
    lines = ["Event\tTotal Attendees\tChecked In", RULE]
    lines += [f"{r.event_name}\t{r.total}\t{r.checked_in}" for r in rows]
    lines.append(RULE)
    return "\n".join(lines)


def render_inventory_report(rows: list[InventoryRow]) -> str:
    lines = ["Item\tTotal\tAllocated\tAvailable\tAllocated To", RULE]
    for r in rows:
        allocated_to = ", ".join(r.events) if r.events else "None"
        lines.append(f"{r.name}\t{r.total}\t{r.allocated}\t{r.available}\t{allocated_to}")
    lines.append(RULE)
    lines.append(f"Total items: {len(rows)}")
    return "\n".join(lines)


def _write(path: Path, lines: Iterable[str]) -> Path:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    except OSError as e:
        raise PersistenceError(str(path), e.strerror or str(e)) from e
    logger.info("export_written", path=str(path))
    return path


def export_attendee_list(store: EntityStore, event_id: int, export_dir: Path) -> Path:
    event = store.events.get(event_id)
    roster = list_attendees(store, event.id)

    lines = [
        f"Attendees for event: {event.name}",
        RULE,
        "Name\tContact Info\tChecked In",
        RULE,
    ]
    for _, attendee in roster:
        if attendee is None:
            lines.append(f"{UNKNOWN}\t{UNKNOWN}\tNo")
        else:
            lines.append(
                f"{attendee.name}\t{attendee.contact_info}\t{'Yes' if attendee.is_checked_in else 'No'}"
            )
    lines.append(RULE)
    lines.append(f"Total attendees: {len(roster)}")

    return _write(Path(export_dir) / f"{event.id}_attendees.txt", lines)


def _stamp(today: Optional[date]) -> str:
    return (today or date.today()).isoformat()


def export_events(store: EntityStore, export_dir: Path, today: Optional[date] = None) -> Path:
    stamp = _stamp(today)
    lines = [f"Events Export - {stamp}", RULE]
    for e in store.events:
        lines += [
            f"ID: {e.id}",
            f"Name: {e.name}",
            f"Date: {e.date}",
            f"Time: {e.time}",
            f"Location: {e.location}",
            f"Description: {e.description}",
            f"Category: {e.category}",
            f"Status: {e.status.label}",
            f"Attendees: {len(e.attendee_ids)}",
            RULE,
        ]
    return _write(Path(export_dir) / f"events_export_{stamp}.txt", lines)


def export_attendees(store: EntityStore, export_dir: Path, today: Optional[date] = None) -> Path:
    stamp = _stamp(today)
    lines = [f"Attendees Export - {stamp}", RULE]
    for a in store.attendees:
        if a.event_id_registered_for == NO_EVENT:
            event_name = "None"
        else:
            event = store.events.find_by_id(a.event_id_registered_for)
            event_name = event.name if event else UNKNOWN
        lines += [
            f"ID: {a.attendee_id}",
            f"Name: {a.name}",
            f"Contact Info: {a.contact_info}",
            f"Event: {event_name}",
            f"Checked In: {'Yes' if a.is_checked_in else 'No'}",
            RULE,
        ]
    return _write(Path(export_dir) / f"attendees_export_{stamp}.txt", lines)


def export_inventory(store: EntityStore, export_dir: Path, today: Optional[date] = None) -> Path:
    stamp = _stamp(today)
    lines = [f"Inventory Export - {stamp}", RULE]
    for row in inventory_report(store):
        lines += [
            f"ID: {row.item_id}",
            f"Name: {row.name}",
            f"Total: {row.total}",
            f"Allocated: {row.allocated}",
            f"Available: {row.available}",
            f"Allocated To: {', '.join(row.events) if row.events else 'None'}",
            RULE,
        ]
    return _write(Path(export_dir) / f"inventory_export_{stamp}.txt", lines)
