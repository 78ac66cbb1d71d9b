"""
In-memory persistence gateway.
Keeps encoded record lines in process memory, so a session behaves exactly
like the flat-file backend (same codec, same lossy free text) but nothing
survives the process.
"""

from typing import Optional

from eventdesk.codec.records import RecordKind, decode, encode
from eventdesk.core.errors import DecodeError
from eventdesk.core.logging import get_logger
from eventdesk.core.metrics import record_loaded, record_saved, record_skipped
from eventdesk.store.interfaces import RecordGateway, StoreSnapshot

logger = get_logger(__name__)


class MemoryGateway(RecordGateway):

    def __init__(self, lines: Optional[dict[RecordKind, list[str]]] = None):
        self.lines: dict[RecordKind, list[str]] = {kind: [] for kind in RecordKind}
        for kind, records in (lines or {}).items():
            self.lines[RecordKind(kind)] = list(records)

    def _decode_all(self, kind: RecordKind) -> list:
        entities = []
        for line in self.lines[kind]:
            if not line.strip():
                continue
            try:
                entities.append(decode(kind, line))
            except DecodeError as e:
                logger.warning("record_skipped", entity=kind.value, error=e.message)
                record_skipped(kind.value)
        record_loaded(kind.value, len(entities))
        return entities

    def load_all(self) -> StoreSnapshot:
        return StoreSnapshot(
            users=self._decode_all(RecordKind.USERS),
            events=self._decode_all(RecordKind.EVENTS),
            attendees=self._decode_all(RecordKind.ATTENDEES),
            inventory=self._decode_all(RecordKind.INVENTORY),
        )

    def save_all(self, snapshot: StoreSnapshot) -> None:
        by_kind = {
            RecordKind.USERS: snapshot.users,
            RecordKind.EVENTS: snapshot.events,
            RecordKind.ATTENDEES: snapshot.attendees,
            RecordKind.INVENTORY: snapshot.inventory,
        }
        for kind, entities in by_kind.items():
            self.lines[kind] = [encode(entity) for entity in entities]
            record_saved(kind.value, len(entities))
