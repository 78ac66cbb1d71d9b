"""
Event service handling CRUD operations.
"""

from typing import Optional

from eventdesk.core.logging import get_logger
from eventdesk.models import NO_EVENT, Event, EventStatus
from eventdesk.schemas.event import EventCreate, EventSearch, EventUpdate
from eventdesk.services import ledger
from eventdesk.store.entity_store import EntityStore

logger = get_logger(__name__)


def create_event(store: EntityStore, event_data: EventCreate) -> Event:
    """Create a new event in Upcoming state with no attendees or allocations."""
    event = store.events.insert(
        Event(
            name=event_data.name,
            date=event_data.date,
            time=event_data.time,
            location=event_data.location,
            description=event_data.description,
            category=event_data.category,
            status=EventStatus.UPCOMING,
        )
    )
    logger.info("event_created", event_id=event.id, name=event.name, date=event.date)
    return event


def get_event(store: EntityStore, event_id: int) -> Event:
    """Get a single event by ID. Raises NotFoundError."""
    return store.events.get(event_id)


def list_events(store: EntityStore, status: Optional[EventStatus] = None) -> list[Event]:
    """List events in store order, optionally filtered by status."""
    events = store.events.all()
    if status is not None:
        events = [e for e in events if e.status is status]
    return events


def search_events(store: EntityStore, search: EventSearch) -> list[Event]:
    """Substring match (case-sensitive) on event name or date."""
    keyword = search.keyword
    return [e for e in store.events if keyword in e.name or keyword in e.date]


def update_event(store: EntityStore, event_id: int, changes: EventUpdate) -> Event:
    """Apply a partial update; unset fields keep their current value."""
    event = store.events.get(event_id)
    updates = changes.model_dump(exclude_none=True)
    for field, value in updates.items():
        setattr(event, field, value)

    if updates:
        logger.info("event_updated", event_id=event.id, fields=sorted(updates))
    return event


def set_status(store: EntityStore, event_id: int, status: EventStatus) -> Event:
    return update_event(store, event_id, EventUpdate(status=status))


def delete_event(store: EntityStore, event_id: int) -> Event:
    """
    Delete an event.

    Order matters: every inventory allocation is released back to its item
    first, and attendee profiles registered for this event fall back to
    profile-only, before the event itself is removed.
    """
    event = store.events.get(event_id)

    released = ledger.release_event(store, event)

    detached = 0
    for attendee in store.attendees:
        if attendee.event_id_registered_for == event.id:
            attendee.event_id_registered_for = NO_EVENT
            attendee.is_checked_in = False
            detached += 1

    store.events.delete(event.id)
    logger.info(
        "event_deleted",
        event_id=event.id,
        released_items=len(released),
        released_quantity=sum(released.values()),
        detached_attendees=detached,
    )
    return event
