"""
Flat-file persistence gateway.

Each entity type lives in its own text file under the data directory, one
encoded record per line. Loads are forgiving and saves are blunt:

  - a missing file is zero records
  - blank lines are ignored
  - a line that fails to decode is logged and skipped; the rest still loads
  - save rewrites every file from scratch; there is no append mode and no
    atomicity across the four files
"""

from pathlib import Path
from typing import Optional

from eventdesk.codec.records import RecordKind, decode, encode
from eventdesk.core.config import Settings
from eventdesk.core.errors import DecodeError, PersistenceError
from eventdesk.core.logging import get_logger
from eventdesk.core.metrics import record_loaded, record_saved, record_skipped
from eventdesk.store.interfaces import RecordGateway, StoreSnapshot

logger = get_logger(__name__)

DEFAULT_FILE_NAMES = {
    RecordKind.USERS: "users.txt",
    RecordKind.EVENTS: "events.txt",
    RecordKind.ATTENDEES: "attendees.txt",
    RecordKind.INVENTORY: "inventory.txt",
}


class FlatFileGateway(RecordGateway):
    """Reads and writes the four record files."""

    def __init__(self, data_dir: Path, file_names: Optional[dict[RecordKind, str]] = None):
        self.data_dir = Path(data_dir)
        self.file_names = {**DEFAULT_FILE_NAMES, **(file_names or {})}

    @classmethod
    def from_settings(cls, settings: Settings) -> "FlatFileGateway":
        return cls(
            settings.DATA_DIR,
            {
                RecordKind.USERS: settings.USERS_FILE,
                RecordKind.EVENTS: settings.EVENTS_FILE,
                RecordKind.ATTENDEES: settings.ATTENDEES_FILE,
                RecordKind.INVENTORY: settings.INVENTORY_FILE,
            },
        )

    def path_for(self, kind: RecordKind) -> Path:
        return self.data_dir / self.file_names[kind]

    def _read(self, kind: RecordKind) -> list:
        path = self.path_for(kind)
        if not path.exists():
            logger.info("record_file_missing", entity=kind.value, path=str(path))
            return []

        entities = []
        try:
            with path.open("r", encoding="utf-8", newline="") as fh:
                for lineno, raw in enumerate(fh, start=1):
                    line = raw.rstrip("\r\n")
                    if not line.strip():
                        continue
                    try:
                        entities.append(decode(kind, line))
                    except DecodeError as e:
                        logger.warning(
                            "record_skipped",
                            entity=kind.value,
                            path=str(path),
                            line_no=lineno,
                            error=e.message,
                        )
                        record_skipped(kind.value)
        except OSError as e:
            raise PersistenceError(str(path), e.strerror or str(e)) from e

        record_loaded(kind.value, len(entities))
        return entities

    def _write(self, kind: RecordKind, entities: list) -> None:
        path = self.path_for(kind)
        lines = [encode(entity) + "\n" for entity in entities]
        try:
            with path.open("w", encoding="utf-8", newline="") as fh:
                fh.writelines(lines)
        except OSError as e:
            raise PersistenceError(str(path), e.strerror or str(e)) from e
        record_saved(kind.value, len(lines))

    def load_all(self) -> StoreSnapshot:
        snapshot = StoreSnapshot(
            users=self._read(RecordKind.USERS),
            events=self._read(RecordKind.EVENTS),
            attendees=self._read(RecordKind.ATTENDEES),
            inventory=self._read(RecordKind.INVENTORY),
        )
        logger.info("records_loaded", data_dir=str(self.data_dir))
        return snapshot

    def save_all(self, snapshot: StoreSnapshot) -> None:
        try:
            self.data_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(str(self.data_dir), e.strerror or str(e)) from e

        self._write(RecordKind.USERS, snapshot.users)
        self._write(RecordKind.EVENTS, snapshot.events)
        self._write(RecordKind.ATTENDEES, snapshot.attendees)
        self._write(RecordKind.INVENTORY, snapshot.inventory)
        logger.info("records_saved", data_dir=str(self.data_dir))
