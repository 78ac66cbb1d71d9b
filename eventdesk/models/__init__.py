from eventdesk.models.user import Role, User
from eventdesk.models.event import Event, EventStatus
from eventdesk.models.attendee import NO_EVENT, Attendee
from eventdesk.models.inventory import InventoryItem

__all__ = [
    "Role", "User",
    "Event", "EventStatus",
    "Attendee", "NO_EVENT",
    "InventoryItem",
]
