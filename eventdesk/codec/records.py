"""
Flat-file record codec.

One entity per line, fields in a fixed order:

  users      id,username,password,role_ordinal
  events     id,name,date,time,location,description,category,status_ordinal,
             attendee_ids(;-joined),allocated_inventory(item_id:qty ;-joined)
  attendees  attendee_id,name,contact_info,event_id_registered_for,checked_in(1|0)
  inventory  item_id,name,total_quantity,allocated_quantity,description

Decoding is positional. The line is split into exactly as many fields as the
record has, so end-of-line terminates the last field: an empty trailing field
needs no trailing delimiter, and surplus commas stay inside the last field.
Free text is written as-is (no escaping), so a comma inside a name or
description does not survive a round trip.
"""

import re
from enum import Enum
from typing import Union

from eventdesk.core.errors import DecodeError
from eventdesk.models import Attendee, Event, EventStatus, InventoryItem, Role, User

FIELD_SEP = ","
LIST_SEP = ";"
PAIR_SEP = ":"

# Plain ASCII digits with an optional minus; int() alone also takes "+5", " 5" and "1_0"
INTEGER = re.compile(r"-?[0-9]+")

Entity = Union[User, Event, Attendee, InventoryItem]


class RecordKind(str, Enum):
    USERS = "users"
    EVENTS = "events"
    ATTENDEES = "attendees"
    INVENTORY = "inventory"


FIELD_COUNTS = {
    RecordKind.USERS: 4,
    RecordKind.EVENTS: 10,
    RecordKind.ATTENDEES: 5,
    RecordKind.INVENTORY: 5,
}


# --- encoding ---------------------------------------------------------------

def encode_user(user: User) -> str:
    return FIELD_SEP.join([str(user.id), user.username, user.password, str(int(user.role))])


def encode_event(event: Event) -> str:
    attendees = LIST_SEP.join(str(a) for a in event.attendee_ids)
    allocations = LIST_SEP.join(
        f"{item_id}{PAIR_SEP}{qty}" for item_id, qty in event.allocated_inventory.items()
    )
    return FIELD_SEP.join([
        str(event.id),
        event.name,
        event.date,
        event.time,
        event.location,
        event.description,
        event.category,
        str(int(event.status)),
        attendees,
        allocations,
    ])


def encode_attendee(attendee: Attendee) -> str:
    return FIELD_SEP.join([
        str(attendee.attendee_id),
        attendee.name,
        attendee.contact_info,
        str(attendee.event_id_registered_for),
        "1" if attendee.is_checked_in else "0",
    ])


def encode_inventory_item(item: InventoryItem) -> str:
    return FIELD_SEP.join([
        str(item.item_id),
        item.name,
        str(item.total_quantity),
        str(item.allocated_quantity),
        item.description,
    ])


_ENCODERS = {
    User: encode_user,
    Event: encode_event,
    Attendee: encode_attendee,
    InventoryItem: encode_inventory_item,
}


def encode(entity: Entity) -> str:
    """Encode any entity into its record line (no trailing newline)."""
    try:
        encoder = _ENCODERS[type(entity)]
    except KeyError:
        raise TypeError(f"No record encoding for {type(entity).__name__}") from None
    return encoder(entity)


# --- decoding ---------------------------------------------------------------

def _fields(line: str, kind: RecordKind) -> list[str]:
    count = FIELD_COUNTS[kind]
    parts = line.rstrip("\r\n").split(FIELD_SEP, count - 1)
    if len(parts) < count:
        raise DecodeError(
            f"{kind.value} record needs {count} fields, got {len(parts)}", line=line
        )
    return parts


def _int(value: str, field: str, line: str) -> int:
    if not INTEGER.fullmatch(value):
        raise DecodeError(f"{field} is not an integer: {value!r}", line=line)
    return int(value)


def _non_negative(value: str, field: str, line: str) -> int:
    number = _int(value, field, line)
    if number < 0:
        raise DecodeError(f"{field} cannot be negative: {number}", line=line)
    return number


def _id_list(value: str, line: str) -> list[int]:
    if not value:
        return []
    ids = [_int(part, "attendee id", line) for part in value.split(LIST_SEP)]
    if len(set(ids)) != len(ids):
        raise DecodeError("duplicate attendee id", line=line)
    return ids


def _allocation_map(value: str, line: str) -> dict[int, int]:
    allocations: dict[int, int] = {}
    if not value:
        return allocations
    for entry in value.split(LIST_SEP):
        item_part, sep, qty_part = entry.partition(PAIR_SEP)
        if not sep:
            raise DecodeError(f"allocation entry missing ':': {entry!r}", line=line)
        item_id = _int(item_part, "allocation item id", line)
        qty = _int(qty_part, "allocation quantity", line)
        if qty <= 0:
            raise DecodeError(f"allocation quantity must be positive: {qty}", line=line)
        if item_id in allocations:
            raise DecodeError(f"duplicate allocation for item {item_id}", line=line)
        allocations[item_id] = qty
    return allocations


def decode_user(line: str) -> User:
    id_, username, password, role = _fields(line, RecordKind.USERS)
    ordinal = _int(role, "role", line)
    try:
        role_value = Role(ordinal)
    except ValueError:
        raise DecodeError(f"unknown role ordinal {ordinal}", line=line) from None
    return User(id=_int(id_, "id", line), username=username, password=password, role=role_value)


def decode_event(line: str) -> Event:
    (id_, name, date, time, location, description,
     category, status, attendees, allocations) = _fields(line, RecordKind.EVENTS)
    ordinal = _int(status, "status", line)
    try:
        status_value = EventStatus(ordinal)
    except ValueError:
        raise DecodeError(f"unknown status ordinal {ordinal}", line=line) from None
    return Event(
        id=_int(id_, "id", line),
        name=name,
        date=date,
        time=time,
        location=location,
        description=description,
        category=category,
        status=status_value,
        attendee_ids=_id_list(attendees, line),
        allocated_inventory=_allocation_map(allocations, line),
    )


def decode_attendee(line: str) -> Attendee:
    id_, name, contact, event_id, checked_in = _fields(line, RecordKind.ATTENDEES)
    if checked_in not in ("0", "1"):
        raise DecodeError(f"checked-in flag must be 1 or 0: {checked_in!r}", line=line)
    return Attendee(
        attendee_id=_int(id_, "attendee id", line),
        name=name,
        contact_info=contact,
        event_id_registered_for=_non_negative(event_id, "event id", line),
        is_checked_in=checked_in == "1",
    )


def decode_inventory_item(line: str) -> InventoryItem:
    id_, name, total, allocated, description = _fields(line, RecordKind.INVENTORY)
    total_qty = _non_negative(total, "total quantity", line)
    allocated_qty = _non_negative(allocated, "allocated quantity", line)
    if allocated_qty > total_qty:
        raise DecodeError(
            f"allocated quantity {allocated_qty} exceeds total {total_qty}", line=line
        )
    return InventoryItem(
        item_id=_int(id_, "item id", line),
        name=name,
        total_quantity=total_qty,
        allocated_quantity=allocated_qty,
        description=description,
    )


_DECODERS = {
    RecordKind.USERS: decode_user,
    RecordKind.EVENTS: decode_event,
    RecordKind.ATTENDEES: decode_attendee,
    RecordKind.INVENTORY: decode_inventory_item,
}


def decode(kind: RecordKind, line: str) -> Entity:
    """Decode one record line. Raises DecodeError; never returns a partial record."""
    return _DECODERS[RecordKind(kind)](line)
