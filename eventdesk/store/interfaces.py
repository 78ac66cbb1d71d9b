"""
Persistence gateway interface.
Allows swapping flat files for an in-memory backend without touching the store.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from eventdesk.models import Attendee, Event, InventoryItem, User


@dataclass
class StoreSnapshot:
    """Plain lists of every entity, in store order."""

    users: list[User] = field(default_factory=list)
    events: list[Event] = field(default_factory=list)
    attendees: list[Attendee] = field(default_factory=list)
    inventory: list[InventoryItem] = field(default_factory=list)


class RecordGateway(ABC):
    """
    Interface for load-all / save-all persistence.

    Implementations:
    - FlatFileGateway: one delimited text file per entity type
    - MemoryGateway: keeps the last saved snapshot in process memory
    """

    @abstractmethod
    def load_all(self) -> StoreSnapshot:
        """
        Read every entity.

        Missing storage counts as zero records. Records that cannot be
        decoded are skipped, not fatal.
        """
        pass

    @abstractmethod
    def save_all(self, snapshot: StoreSnapshot) -> None:
        """
        Replace everything persisted with the given snapshot.

        Raises:
            PersistenceError: if the underlying storage cannot be written
        """
        pass
