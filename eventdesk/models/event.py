"""
Event model with attendee and inventory references.

Key design decisions:
- Attendees and inventory are referenced by numeric id only, never embedded
- `allocated_inventory` is this event's side of the allocation ledger;
  InventoryItem.allocated_quantity is the global side
- Status values are persisted ordinals
"""

from dataclasses import dataclass, field
from enum import IntEnum


class EventStatus(IntEnum):
    UPCOMING = 0
    ONGOING = 1
    COMPLETED = 2
    CANCELED = 3

    @property
    def label(self) -> str:
        return self.name.capitalize()

    @classmethod
    def from_label(cls, label: str) -> "EventStatus":
        try:
            return cls[label.strip().upper()]
        except KeyError:
            raise ValueError(f"Unknown status {label!r}") from None


@dataclass
class Event:
    name: str
    date: str  # YYYY-MM-DD
    time: str  # HH:MM
    location: str = ""
    description: str = ""
    category: str = ""
    status: EventStatus = EventStatus.UPCOMING
    attendee_ids: list[int] = field(default_factory=list)
    allocated_inventory: dict[int, int] = field(default_factory=dict)
    id: int = 0

    def has_attendee(self, attendee_id: int) -> bool:
        return attendee_id in self.attendee_ids

    def allocated_for(self, item_id: int) -> int:
        return self.allocated_inventory.get(item_id, 0)

    def __repr__(self) -> str:
        return f"<Event(id={self.id}, name={self.name}, date={self.date}, status={self.status.label})>"
