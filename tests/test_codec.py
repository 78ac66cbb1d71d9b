"""
Tests for the flat-file record codec.
"""

import pytest

from eventdesk.codec import RecordKind, decode, encode
from eventdesk.core.errors import DecodeError
from eventdesk.models import Attendee, Event, EventStatus, InventoryItem, Role, User


def test_decode_user_line():
    """A plain user line decodes positionally with the role ordinal."""
    user = decode(RecordKind.USERS, "5,alice,secret1,1")
    assert user == User(id=5, username="alice", password="secret1", role=Role.REGULAR_USER)


def test_role_and_status_ordinals_are_stable():
    assert [int(r) for r in (Role.ADMIN, Role.REGULAR_USER, Role.NONE)] == [0, 1, 2]
    assert [int(s) for s in EventStatus] == [0, 1, 2, 3]
    assert encode(User(id=1, username="root", password="pw", role=Role.ADMIN)) == "1,root,pw,0"


def test_encode_event_with_lists():
    event = Event(
        id=7,
        name="Gala",
        date="2026-05-01",
        time="19:30",
        location="Ballroom",
        description="Dinner",
        category="Social",
        status=EventStatus.CANCELED,
        attendee_ids=[3, 1, 2],
        allocated_inventory={3: 5, 4: 12},
    )
    assert encode(event) == "7,Gala,2026-05-01,19:30,Ballroom,Dinner,Social,3,3;1;2,3:5;4:12"


def test_decode_event_with_empty_trailing_lists():
    """End of line terminates the last field; no trailing delimiter needed."""
    event = decode(RecordKind.EVENTS, "2,Meetup,2026-01-10,18:00,Cafe,,Social,0,,")
    assert event.id == 2
    assert event.description == ""
    assert event.attendee_ids == []
    assert event.allocated_inventory == {}
    assert event.status is EventStatus.UPCOMING


def test_decode_inventory_with_empty_description():
    item = decode(RecordKind.INVENTORY, "3,Chairs,100,30,")
    assert item == InventoryItem(item_id=3, name="Chairs", total_quantity=100, allocated_quantity=30, description="")
    assert item.available_quantity == 70


def test_decode_attendee_checked_in_flag():
    attendee = decode(RecordKind.ATTENDEES, "4,Bob,bob@example.com,2,1")
    assert attendee == Attendee(
        attendee_id=4, name="Bob", contact_info="bob@example.com", event_id_registered_for=2, is_checked_in=True
    )


def test_decode_strips_line_endings():
    assert decode(RecordKind.USERS, "1,admin,admin123,0\r\n").role is Role.ADMIN


@pytest.mark.parametrize(
    "kind,line",
    [
        (RecordKind.USERS, "5,alice,secret1"),  # short line
        (RecordKind.USERS, "x,alice,secret1,1"),  # non-numeric id
        (RecordKind.USERS, "1_0,alice,secret1,1"),  # int() would read this as 10
        (RecordKind.USERS, "+5,alice,secret1,1"),
        (RecordKind.USERS, " 5,alice,secret1,1"),
        (RecordKind.ATTENDEES, "4,Bob,bob@example.com,+2,0"),
        (RecordKind.USERS, "5,alice,secret1,7"),  # unknown role ordinal
        (RecordKind.EVENTS, "1,Gala,2026-05-01,19:30,Hall,Desc,Social,0,"),  # missing allocations field
        (RecordKind.EVENTS, "1,Gala,2026-05-01,19:30,Hall,Desc,Social,9,,"),  # unknown status
        (RecordKind.EVENTS, "1,Gala,2026-05-01,19:30,Hall,Desc,Social,0,1;x,"),  # bad attendee id
        (RecordKind.EVENTS, "1,Gala,2026-05-01,19:30,Hall,Desc,Social,0,1;1,"),  # duplicate attendee
        (RecordKind.EVENTS, "1,Gala,2026-05-01,19:30,Hall,Desc,Social,0,,3-5"),  # missing colon
        (RecordKind.EVENTS, "1,Gala,2026-05-01,19:30,Hall,Desc,Social,0,,3:0"),  # zero quantity
        (RecordKind.EVENTS, "1,Gala,2026-05-01,19:30,Hall,Desc,Social,0,,3:1;3:2"),  # duplicate key
        (RecordKind.ATTENDEES, "4,Bob,bob@example.com,2,yes"),  # bad flag
        (RecordKind.INVENTORY, "3,Chairs,ten,0,"),  # non-numeric quantity
        (RecordKind.INVENTORY, "3,Chairs,10,11,"),  # allocated above total
        (RecordKind.INVENTORY, "3,Chairs,-1,0,"),  # negative total
    ],
)
def test_malformed_lines_raise_decode_error(kind, line):
    with pytest.raises(DecodeError):
        decode(kind, line)


def test_round_trip_every_entity_type():
    """decode(encode(e)) == e when free text has no delimiters."""
    entities = [
        (RecordKind.USERS, User(id=9, username="bob_smith", password="p@ss:word;x", role=Role.NONE)),
        (RecordKind.EVENTS, Event(
            id=12, name="Hack Night", date="2026-09-09", time="21:00", location="Lab 3",
            description="Bring laptops", category="Tech", status=EventStatus.ONGOING,
            attendee_ids=[4, 9], allocated_inventory={1: 2},
        )),
        (RecordKind.ATTENDEES, Attendee(attendee_id=9, name="bob_smith", contact_info="555-0100")),
        (RecordKind.INVENTORY, InventoryItem(item_id=1, name="Projector", total_quantity=3, allocated_quantity=2)),
    ]
    for kind, entity in entities:
        assert decode(kind, encode(entity)) == entity


def test_comma_in_free_text_is_lossy():
    """Free text is not escaped: an embedded comma does not survive the round trip."""
    item = InventoryItem(item_id=2, name="Cups", total_quantity=10, description="Paper, recyclable")
    # The description is the final field, so the comma is absorbed into it...
    assert decode(RecordKind.INVENTORY, encode(item)) == item

    # ...but in a middle field it shifts every later field and the line is rejected.
    event = Event(id=1, name="Food, Drinks", date="2026-01-01", time="12:00")
    with pytest.raises(DecodeError):
        decode(RecordKind.EVENTS, encode(event))


def test_encode_rejects_unknown_types():
    with pytest.raises(TypeError):
        encode("not an entity")
