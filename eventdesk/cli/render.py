"""Text rendering of entities for the console."""

from eventdesk.models import NO_EVENT, Attendee, Event, InventoryItem, User
from eventdesk.services.inventory_service import UNKNOWN
from eventdesk.store.entity_store import EntityStore


def format_event(event: Event, store: EntityStore) -> str:
    allocations = []
    for item_id, qty in event.allocated_inventory.items():
        item = store.inventory.find_by_id(item_id)
        allocations.append(f"{item.name if item else UNKNOWN} x{qty}")
    return "\n".join([
        f"\nEvent ID: {event.id}",
        f"Name: {event.name}",
        f"Date: {event.date}",
        f"Time: {event.time}",
        f"Location: {event.location}",
        f"Description: {event.description}",
        f"Category: {event.category}",
        f"Status: {event.status.label}",
        f"Attendees: {len(event.attendee_ids)}",
        f"Inventory: {', '.join(allocations) if allocations else 'None'}",
    ])


def format_attendee(attendee: Attendee, store: EntityStore) -> str:
    if attendee.event_id_registered_for == NO_EVENT:
        event_name = "None"
    else:
        event = store.events.find_by_id(attendee.event_id_registered_for)
        event_name = event.name if event else UNKNOWN
    return "\n".join([
        f"\nAttendee ID: {attendee.attendee_id}",
        f"Name: {attendee.name}",
        f"Contact Info: {attendee.contact_info}",
        f"Event: {event_name}",
        f"Checked In: {'Yes' if attendee.is_checked_in else 'No'}",
    ])


def format_item(item: InventoryItem) -> str:
    return "\n".join([
        f"\nItem ID: {item.item_id}",
        f"Name: {item.name}",
        f"Total: {item.total_quantity}",
        f"Allocated: {item.allocated_quantity}",
        f"Available: {item.available_quantity}",
        f"Description: {item.description}",
    ])


def format_user(user: User) -> str:
    return f"\nUser ID: {user.id}\nUsername: {user.username}\nRole: {user.role.name.replace('_', ' ').title()}"
