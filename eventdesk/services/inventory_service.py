"""
Inventory service: item CRUD plus the store-facing side of the allocation ledger.
"""

from eventdesk.core.errors import NotFoundError, ValidationError
from eventdesk.core.logging import get_logger
from eventdesk.models import InventoryItem
from eventdesk.schemas.inventory import AllocationRequest, InventoryItemCreate, InventoryItemUpdate
from eventdesk.services import ledger
from eventdesk.store.entity_store import EntityStore

logger = get_logger(__name__)

UNKNOWN = "Unknown"


def add_item(store: EntityStore, item_data: InventoryItemCreate) -> InventoryItem:
    """Add an item. Names are unique ignoring case (checked before insert)."""
    if store.find_item_by_name(item_data.name):
        raise ValidationError("An item with this name already exists")

    item = store.inventory.insert(
        InventoryItem(
            name=item_data.name,
            total_quantity=item_data.total_quantity,
            description=item_data.description,
        )
    )
    logger.info("inventory_item_added", item_id=item.item_id, name=item.name, total=item.total_quantity)
    return item


def get_item(store: EntityStore, item_id: int) -> InventoryItem:
    return store.inventory.get(item_id)


def get_item_by_name(store: EntityStore, name: str) -> InventoryItem:
    item = store.find_item_by_name(name)
    if item is None:
        raise NotFoundError("Inventory item", repr(name))
    return item


def list_items(store: EntityStore) -> list[InventoryItem]:
    return store.inventory.all()


def update_item(store: EntityStore, item_id: int, changes: InventoryItemUpdate) -> InventoryItem:
    item = store.inventory.get(item_id)
    if changes.name is not None:
        clash = store.find_item_by_name(changes.name)
        if clash is not None and clash.item_id != item.item_id:
            raise ValidationError("An item with this name already exists")
        item.name = changes.name
    if changes.description is not None:
        item.description = changes.description
    logger.info("inventory_item_updated", item_id=item.item_id)
    return item


def set_total_quantity(store: EntityStore, item_id: int, new_total: int) -> InventoryItem:
    item = store.inventory.get(item_id)
    ledger.set_total_quantity(item, new_total)
    return item


def delete_item(store: EntityStore, item_id: int) -> InventoryItem:
    """Delete an item that is not allocated to any event."""
    item = store.inventory.get(item_id)
    if item.allocated_quantity > 0:
        raise ValidationError(
            f"{item.name} still has {item.allocated_quantity} allocated; deallocate it first"
        )
    store.inventory.delete(item.item_id)
    logger.info("inventory_item_deleted", item_id=item.item_id)
    return item


def allocate_to_event(store: EntityStore, request: AllocationRequest) -> InventoryItem:
    item = store.inventory.get(request.item_id)
    event = store.events.get(request.event_id)
    ledger.allocate(item, event, request.quantity)
    return item


def deallocate_from_event(store: EntityStore, item_id: int, event_id: int, qty: int) -> int:
    item = store.inventory.get(item_id)
    event = store.events.get(event_id)
    return ledger.deallocate(item, event, qty)


def event_allocations(store: EntityStore, event_id: int) -> list[tuple[int, str, int]]:
    """(item_id, item name, quantity) for an event; missing items render as Unknown."""
    event = store.events.get(event_id)
    rows = []
    for item_id, qty in event.allocated_inventory.items():
        item = store.inventory.find_by_id(item_id)
        rows.append((item_id, item.name if item else UNKNOWN, qty))
    return rows
