"""
Pytest fixtures for stores, gateways, settings and scripted consoles.

Every test gets a fresh EntityStore and a data directory under tmp_path, so
nothing touches the working directory.
"""

from pathlib import Path
from typing import Iterable

import pytest

from eventdesk.cli.prompts import Console
from eventdesk.core.config import Settings
from eventdesk.infrastructure.flat_file import FlatFileGateway
from eventdesk.models import Event, InventoryItem, Role, User
from eventdesk.store.entity_store import EntityStore


class ScriptedConsole(Console):
    """Console fed from a list of answers; raises EOFError once they run out."""

    def __init__(self, answers: Iterable[str]):
        self.answers = list(answers)
        self.output: list[str] = []
        super().__init__(input_fn=self._next_answer, output_fn=self.output.append)

    def _next_answer(self, prompt: str) -> str:
        self.output.append(prompt)
        if not self.answers:
            raise EOFError
        return self.answers.pop(0)

    @property
    def text(self) -> str:
        return "\n".join(self.output)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    return Settings(
        DATA_DIR=tmp_path / "data",
        EXPORT_DIR=tmp_path / "exports",
        _env_file=None,
    )


@pytest.fixture
def store() -> EntityStore:
    return EntityStore()


@pytest.fixture
def gateway(settings: Settings) -> FlatFileGateway:
    return FlatFileGateway.from_settings(settings)


@pytest.fixture
def admin(store: EntityStore) -> User:
    return store.users.insert(User(username="admin", password="admin123", role=Role.ADMIN))


@pytest.fixture
def regular_user(store: EntityStore) -> User:
    return store.users.insert(User(username="alice", password="secret1", role=Role.REGULAR_USER))


@pytest.fixture
def test_event(store: EntityStore) -> Event:
    """An upcoming conference with no attendees or allocations."""
    return store.events.insert(
        Event(
            name="Tech Conference",
            date="2026-03-14",
            time="09:00",
            location="Main Hall",
            description="Annual technology conference",
            category="Conference",
        )
    )


@pytest.fixture
def chairs(store: EntityStore) -> InventoryItem:
    """100 chairs, none allocated."""
    return store.inventory.insert(InventoryItem(name="Chairs", total_quantity=100, description="Folding"))


@pytest.fixture
def make_console():
    """Factory for ScriptedConsole; tests pass their own answer list."""
    return ScriptedConsole
