from eventdesk.schemas.user import UserCreate, UserLogin
from eventdesk.schemas.event import EventCreate, EventSearch, EventUpdate
from eventdesk.schemas.attendee import AttendeeCreate, ContactUpdate
from eventdesk.schemas.inventory import AllocationRequest, InventoryItemCreate, InventoryItemUpdate

__all__ = [
    "UserCreate", "UserLogin",
    "EventCreate", "EventUpdate", "EventSearch",
    "AttendeeCreate", "ContactUpdate",
    "InventoryItemCreate", "InventoryItemUpdate", "AllocationRequest",
]
