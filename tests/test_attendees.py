"""
Tests for attendee registration, check-in and cancellation.
"""

import pytest

from eventdesk.core.errors import NotFoundError, ValidationError
from eventdesk.models import NO_EVENT, Attendee, Event
from eventdesk.schemas import AttendeeCreate, ContactUpdate, UserCreate
from eventdesk.services import attendee_service, auth_service


def test_register_attendee_adds_to_event(store, test_event):
    bob = attendee_service.register_attendee(
        store, test_event.id, AttendeeCreate(name="Bob", contact_info="bob@example.com")
    )
    assert test_event.attendee_ids == [bob.attendee_id]
    assert bob.event_id_registered_for == test_event.id
    assert bob.is_checked_in is False


def test_register_same_name_twice_is_rejected(store, test_event):
    data = AttendeeCreate(name="Bob", contact_info="bob@example.com")
    attendee_service.register_attendee(store, test_event.id, data)
    with pytest.raises(ValidationError):
        attendee_service.register_attendee(store, test_event.id, data)
    assert len(test_event.attendee_ids) == 1


def test_register_for_missing_event(store):
    with pytest.raises(NotFoundError):
        attendee_service.register_attendee(store, 5, AttendeeCreate(name="Bob", contact_info="x"))


def test_self_registration_reuses_user_id(store, regular_user, test_event):
    """A user's attendee profile carries the user's own id."""
    second = store.events.insert(Event(name="Workshop", date="2026-03-15", time="14:00"))

    first_profile = attendee_service.register_self(
        store, regular_user, test_event.id, ContactUpdate(contact_info="alice@example.com")
    )
    again = attendee_service.register_self(store, regular_user, second.id)

    assert first_profile is again
    assert first_profile.attendee_id == regular_user.id
    assert first_profile.event_id_registered_for == test_event.id  # single-valued, first event kept
    assert regular_user.id in test_event.attendee_ids
    assert regular_user.id in second.attendee_ids
    assert attendee_service.registrations_for(store, regular_user.id) == [test_event, second]


def test_self_registration_requires_contact_first_time(store, regular_user, test_event):
    with pytest.raises(ValidationError):
        attendee_service.register_self(store, regular_user, test_event.id)


def test_self_registration_twice_for_same_event(store, regular_user, test_event):
    contact = ContactUpdate(contact_info="alice@example.com")
    attendee_service.register_self(store, regular_user, test_event.id, contact)
    with pytest.raises(ValidationError):
        attendee_service.register_self(store, regular_user, test_event.id, contact)


def test_check_in_is_one_way(store, test_event):
    bob = attendee_service.register_attendee(store, test_event.id, AttendeeCreate(name="Bob", contact_info="x"))
    attendee_service.check_in(store, test_event.id, bob.attendee_id)
    assert bob.is_checked_in is True
    with pytest.raises(ValidationError):
        attendee_service.check_in(store, test_event.id, bob.attendee_id)


def test_check_in_requires_membership(store, test_event):
    with pytest.raises(NotFoundError):
        attendee_service.check_in(store, test_event.id, 77)


def test_cancel_registration_resets_profile(store, test_event):
    bob = attendee_service.register_attendee(store, test_event.id, AttendeeCreate(name="Bob", contact_info="x"))
    attendee_service.check_in(store, test_event.id, bob.attendee_id)

    attendee_service.cancel_registration(store, test_event.id, bob.attendee_id)

    assert test_event.attendee_ids == []
    assert bob.event_id_registered_for == NO_EVENT
    assert bob.is_checked_in is False
    with pytest.raises(NotFoundError):
        attendee_service.cancel_registration(store, test_event.id, bob.attendee_id)


def test_list_attendees_reports_missing_profiles(store, test_event):
    bob = attendee_service.register_attendee(store, test_event.id, AttendeeCreate(name="Bob", contact_info="x"))
    test_event.attendee_ids.append(404)

    roster = attendee_service.list_attendees(store, test_event.id)

    assert roster == [(bob.attendee_id, bob), (404, None)]


def test_update_contact_info(store, test_event):
    bob = attendee_service.register_attendee(store, test_event.id, AttendeeCreate(name="Bob", contact_info="old"))
    attendee_service.update_contact_info(store, bob.attendee_id, ContactUpdate(contact_info="new@example.com"))
    assert bob.contact_info == "new@example.com"


def test_admin_attendees_and_user_signups_never_share_ids(store, admin, test_event):
    """Admin-created profiles and accounts interleave without an id collision."""
    bob = attendee_service.register_attendee(store, test_event.id, AttendeeCreate(name="Bob", contact_info="bob@x"))
    alice = auth_service.register_user(store, UserCreate(username="alice", password="secret1"))
    carol = attendee_service.register_attendee(
        store, test_event.id, AttendeeCreate(name="Carol", contact_info="carol@x")
    )

    assert len({admin.id, bob.attendee_id, alice.id, carol.attendee_id}) == 4
    assert store.attendees.find_by_id(alice.id) is None

    profile = attendee_service.register_self(store, alice, test_event.id, ContactUpdate(contact_info="alice@x"))
    assert profile.attendee_id == alice.id
    assert profile.name == "alice"

    attendee_service.update_my_contact_info(store, alice, ContactUpdate(contact_info="alice@new"))
    attendee_service.cancel_my_registration(store, alice, test_event.id)

    assert profile.contact_info == "alice@new"
    assert carol.contact_info == "carol@x"
    assert test_event.attendee_ids == [bob.attendee_id, carol.attendee_id]


def test_user_paths_ignore_a_profile_owned_by_someone_else(store, regular_user, test_event):
    """Loaded files may already hold another person's profile at the user's id."""
    carol = store.attendees.insert(
        Attendee(name="Carol", contact_info="carol@x", event_id_registered_for=test_event.id, attendee_id=regular_user.id)
    )
    test_event.attendee_ids.append(carol.attendee_id)

    assert attendee_service.own_profile(store, regular_user) is None
    assert attendee_service.my_registrations(store, regular_user) == []
    with pytest.raises(NotFoundError):
        attendee_service.update_my_contact_info(store, regular_user, ContactUpdate(contact_info="alice@x"))
    with pytest.raises(NotFoundError):
        attendee_service.cancel_my_registration(store, regular_user, test_event.id)
    with pytest.raises(ValidationError):
        attendee_service.register_self(store, regular_user, test_event.id, ContactUpdate(contact_info="alice@x"))

    assert carol.contact_info == "carol@x"
    assert test_event.attendee_ids == [carol.attendee_id]
