"""
Attendee service: registration, check-in and profile updates.

Membership of an event is Event.attendee_ids. The attendee profile only
remembers one event (event_id_registered_for), so a profile can sit in
several events' lists while naming just the first one it joined.
"""

from typing import Optional

from eventdesk.core.errors import NotFoundError, ValidationError
from eventdesk.core.logging import get_logger
from eventdesk.models import NO_EVENT, Attendee, Event, User
from eventdesk.schemas.attendee import AttendeeCreate, ContactUpdate
from eventdesk.store.entity_store import EntityStore

logger = get_logger(__name__)


def _attendee_names(store: EntityStore, event: Event) -> set[str]:
    names = set()
    for attendee_id in event.attendee_ids:
        attendee = store.attendees.find_by_id(attendee_id)
        if attendee:
            names.add(attendee.name)
    return names


def register_attendee(store: EntityStore, event_id: int, data: AttendeeCreate) -> Attendee:
    """Create a new attendee profile and add it to the event (admin flow)."""
    event = store.events.get(event_id)
    if data.name in _attendee_names(store, event):
        raise ValidationError("This attendee is already registered for this event")

    attendee = store.attendees.insert(
        Attendee(
            attendee_id=store.next_person_id(),
            name=data.name,
            contact_info=data.contact_info,
            event_id_registered_for=event.id,
        )
    )
    event.attendee_ids.append(attendee.attendee_id)
    logger.info("attendee_registered", attendee_id=attendee.attendee_id, event_id=event.id)
    return attendee


def own_profile(store: EntityStore, user: User) -> Optional[Attendee]:
    """
    The session user's attendee profile, or None if they have none yet.

    The profile lives at the user's id. A profile at that id under another
    name belongs to someone else (records from older files can overlap) and
    is never handed to the user.
    """
    attendee = store.attendees.find_by_id(user.id)
    if attendee is None:
        return None
    if attendee.name != user.username:
        logger.warning("attendee_id_owned_by_other", user_id=user.id, profile_name=attendee.name)
        return None
    return attendee


def get_own_profile(store: EntityStore, user: User) -> Attendee:
    """Like own_profile() but raises NotFoundError when the user has no profile."""
    attendee = own_profile(store, user)
    if attendee is None:
        raise NotFoundError("Attendee profile for", user.username)
    return attendee


def register_self(
    store: EntityStore,
    user: User,
    event_id: int,
    contact: Optional[ContactUpdate] = None,
) -> Attendee:
    """
    Register the session user for an event. The attendee id is the user id.

    The first registration creates the profile and needs contact info; later
    registrations reuse it.
    """
    event = store.events.get(event_id)
    attendee = store.attendees.find_by_id(user.id)
    if attendee is not None and attendee.name != user.username:
        raise ValidationError(f"Attendee id {user.id} belongs to another profile")
    if event.has_attendee(user.id):
        raise ValidationError("You are already registered for this event")

    if attendee is None:
        if contact is None:
            raise ValidationError("Contact info is required for your first registration")
        attendee = store.attendees.insert(
            Attendee(
                attendee_id=user.id,
                name=user.username,
                contact_info=contact.contact_info,
                event_id_registered_for=event.id,
            )
        )
    else:
        if contact is not None:
            attendee.contact_info = contact.contact_info
        if attendee.event_id_registered_for == NO_EVENT:
            attendee.event_id_registered_for = event.id

    event.attendee_ids.append(attendee.attendee_id)
    logger.info("attendee_self_registered", attendee_id=attendee.attendee_id, event_id=event.id)
    return attendee


def list_attendees(store: EntityStore, event_id: int) -> list[tuple[int, Optional[Attendee]]]:
    """
    Attendees of an event in registration order.
    A missing profile is reported as (attendee_id, None) rather than dropped.
    """
    event = store.events.get(event_id)
    roster = []
    for attendee_id in event.attendee_ids:
        attendee = store.attendees.find_by_id(attendee_id)
        if attendee is None:
            logger.warning("attendee_profile_missing", event_id=event.id, attendee_id=attendee_id)
        roster.append((attendee_id, attendee))
    return roster


def registrations_for(store: EntityStore, attendee_id: int) -> list[Event]:
    return [e for e in store.events if e.has_attendee(attendee_id)]


def check_in(store: EntityStore, event_id: int, attendee_id: int) -> Attendee:
    event = store.events.get(event_id)
    if not event.has_attendee(attendee_id):
        raise NotFoundError("Attendee", f"{attendee_id} for event {event.id}")
    attendee = store.attendees.get(attendee_id)
    if attendee.is_checked_in:
        raise ValidationError("Attendee is already checked in")

    attendee.is_checked_in = True
    logger.info("attendee_checked_in", attendee_id=attendee_id, event_id=event.id)
    return attendee


def cancel_registration(store: EntityStore, event_id: int, attendee_id: int) -> Event:
    """Remove an attendee from an event; a profile pointing at it reverts to profile-only."""
    event = store.events.get(event_id)
    if not event.has_attendee(attendee_id):
        raise NotFoundError("Attendee", f"{attendee_id} for event {event.id}")

    event.attendee_ids.remove(attendee_id)
    attendee = store.attendees.find_by_id(attendee_id)
    if attendee and attendee.event_id_registered_for == event.id:
        attendee.event_id_registered_for = NO_EVENT
        attendee.is_checked_in = False

    logger.info("registration_cancelled", attendee_id=attendee_id, event_id=event.id)
    return event


def update_contact_info(store: EntityStore, attendee_id: int, update: ContactUpdate) -> Attendee:
    attendee = store.attendees.get(attendee_id)
    attendee.contact_info = update.contact_info
    logger.info("attendee_contact_updated", attendee_id=attendee_id)
    return attendee


# --- session-user paths --------------------------------------------------
# These resolve the caller's profile through own_profile() and never act on
# whichever attendee merely holds the same id.

def my_registrations(store: EntityStore, user: User) -> list[Event]:
    if own_profile(store, user) is None:
        return []
    return registrations_for(store, user.id)


def update_my_contact_info(store: EntityStore, user: User, update: ContactUpdate) -> Attendee:
    attendee = get_own_profile(store, user)
    return update_contact_info(store, attendee.attendee_id, update)


def cancel_my_registration(store: EntityStore, user: User, event_id: int) -> Event:
    attendee = get_own_profile(store, user)
    return cancel_registration(store, event_id, attendee.attendee_id)
