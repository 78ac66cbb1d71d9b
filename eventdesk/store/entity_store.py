"""
In-memory entity store.

ID STRATEGY
===========

Each collection owns a counter. Inserting an entity whose id is 0 takes the
counter value; inserting with an explicit id (an attendee profile that reuses
the owning user's id) is allowed if the id is free, and the counter is pushed
past it. The counter only ever moves forward, so deleted ids are never handed
out again within a session. After a load the counter restarts at
max(existing ids) + 1, or 1 for an empty collection.

User ids and admin-created attendee ids both come from next_person_id(), the
higher of the two counters, so a user's own profile id is never already taken
by someone else's profile.

Capacity ceilings are optional configuration. A full collection rejects
inserts with CapacityError; nothing else about storage is fixed-size.
"""

from typing import Generic, Iterator, Optional, TypeVar

from eventdesk.codec.records import RecordKind
from eventdesk.core.config import Settings
from eventdesk.core.errors import CapacityError, NotFoundError, ValidationError
from eventdesk.core.logging import get_logger
from eventdesk.models import Attendee, Event, InventoryItem, User
from eventdesk.store.interfaces import StoreSnapshot

logger = get_logger(__name__)

T = TypeVar("T", User, Event, Attendee, InventoryItem)


class Collection(Generic[T]):
    """Id-keyed, insertion-ordered collection of one entity type."""

    def __init__(self, kind: RecordKind, label: str, capacity: Optional[int] = None):
        self.kind = kind
        self.label = label
        self.capacity = capacity
        self._items: dict[int, T] = {}
        self._next_id = 1

    @property
    def next_id(self) -> int:
        return self._next_id

    def insert(self, entity: T) -> T:
        if self.capacity is not None and len(self._items) >= self.capacity:
            raise CapacityError(f"Maximum {self.label.lower()} capacity ({self.capacity}) reached")

        if entity.id == 0:
            entity.id = self._next_id
        elif entity.id < 0:
            raise ValidationError(f"{self.label} id must be positive")
        elif entity.id in self._items:
            raise ValidationError(f"{self.label} id {entity.id} already exists")

        self._items[entity.id] = entity
        self._next_id = max(self._next_id, entity.id + 1)
        return entity

    def find_by_id(self, entity_id: int) -> Optional[T]:
        return self._items.get(entity_id)

    def get(self, entity_id: int) -> T:
        entity = self._items.get(entity_id)
        if entity is None:
            raise NotFoundError(self.label, entity_id)
        return entity

    def delete(self, entity_id: int) -> T:
        entity = self._items.pop(entity_id, None)
        if entity is None:
            raise NotFoundError(self.label, entity_id)
        return entity

    def all(self) -> list[T]:
        return list(self._items.values())

    def load(self, entities: list[T]) -> None:
        """
        Replace contents with loaded records and bootstrap the id counter.
        Records past the capacity ceiling are kept; the ceiling only applies to insert.
        """
        self._items.clear()
        for entity in entities:
            if entity.id <= 0 or entity.id in self._items:
                logger.warning("record_rejected", entity=self.kind.value, id=entity.id, reason="bad_or_duplicate_id")
                continue
            self._items[entity.id] = entity
        self._next_id = max(self._items, default=0) + 1
        if self.capacity is not None and len(self._items) > self.capacity:
            logger.warning(
                "capacity_exceeded_on_load",
                entity=self.kind.value,
                loaded=len(self._items),
                capacity=self.capacity,
            )

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items


class EntityStore:
    """Owns the four entity collections. One instance per running session."""

    def __init__(
        self,
        max_users: Optional[int] = None,
        max_events: Optional[int] = None,
        max_attendees: Optional[int] = None,
        max_inventory_items: Optional[int] = None,
    ):
        self.users: Collection[User] = Collection(RecordKind.USERS, "User", max_users)
        self.events: Collection[Event] = Collection(RecordKind.EVENTS, "Event", max_events)
        self.attendees: Collection[Attendee] = Collection(RecordKind.ATTENDEES, "Attendee", max_attendees)
        self.inventory: Collection[InventoryItem] = Collection(
            RecordKind.INVENTORY, "Inventory item", max_inventory_items
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "EntityStore":
        return cls(
            max_users=settings.MAX_USERS,
            max_events=settings.MAX_EVENTS,
            max_attendees=settings.MAX_ATTENDEES,
            max_inventory_items=settings.MAX_INVENTORY_ITEMS,
        )

    def next_person_id(self) -> int:
        """
        Next id free in both users and attendees.

        A user's own attendee profile reuses the user id, so new accounts and
        admin-created attendee profiles draw from this shared high-water mark
        and never land on each other's ids.
        """
        return max(self.users.next_id, self.attendees.next_id)

    def find_user_by_username(self, username: str) -> Optional[User]:
        """Exact, case-sensitive match."""
        for user in self.users:
            if user.username == username:
                return user
        return None

    def find_item_by_name(self, name: str) -> Optional[InventoryItem]:
        """Case-insensitive match on the trimmed name."""
        wanted = name.strip().casefold()
        for item in self.inventory:
            if item.name.strip().casefold() == wanted:
                return item
        return None

    def delete_user(self, user_id: int, session_user_id: Optional[int] = None) -> User:
        if session_user_id is not None and user_id == session_user_id:
            raise ValidationError("You cannot delete your own account")
        return self.users.delete(user_id)

    def load(self, snapshot: StoreSnapshot) -> None:
        self.users.load(snapshot.users)
        self.events.load(snapshot.events)
        self.attendees.load(snapshot.attendees)
        self.inventory.load(snapshot.inventory)
        logger.info(
            "store_loaded",
            users=len(self.users),
            events=len(self.events),
            attendees=len(self.attendees),
            inventory=len(self.inventory),
        )

    def snapshot(self) -> StoreSnapshot:
        return StoreSnapshot(
            users=self.users.all(),
            events=self.events.all(),
            attendees=self.attendees.all(),
            inventory=self.inventory.all(),
        )
