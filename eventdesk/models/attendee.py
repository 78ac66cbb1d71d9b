"""
Attendee profile.

`event_id_registered_for` names a single event (0 = profile only) even though
the same attendee id may appear in several events' attendee_ids. Per-event
membership is read from Event.attendee_ids.
"""

from dataclasses import dataclass

NO_EVENT = 0


@dataclass
class Attendee:
    name: str
    contact_info: str
    event_id_registered_for: int = NO_EVENT
    is_checked_in: bool = False
    attendee_id: int = 0

    @property
    def id(self) -> int:
        return self.attendee_id

    @id.setter
    def id(self, value: int) -> None:
        self.attendee_id = value

    def __repr__(self) -> str:
        return f"<Attendee(id={self.attendee_id}, name={self.name}, event={self.event_id_registered_for})>"
