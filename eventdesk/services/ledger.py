"""
Allocation ledger: inventory quantity bookkeeping between items and events.

CONSISTENCY STRATEGY: Double-Entry Updates
==========================================

Problem:
  An item's stock is promised out in two places: globally on the item
  (InventoryItem.allocated_quantity) and locally on each event
  (Event.allocated_inventory[item_id]). If only one side moves, stock either
  leaks (deleted event keeps the item's quantity reserved forever) or is
  double-promised (item looks free while events still hold it).

Solution:
  Every ledger operation validates first and then updates both sides
  together. A rejected operation mutates nothing.

  allocate    qty > 0 and qty <= available, then item += qty, event += qty
  deallocate  clamp qty to what the event holds, then item -= n, event -= n,
              dropping the event entry at zero
  release     deallocate every entry of an event (used before deleting it)

  Invariant after any sequence of these:
    item.allocated_quantity == sum(e.allocated_inventory.get(item.id, 0) for e in events)

  The invariant is checked at operation time only. Files edited by hand can
  drift; audit() reports that drift instead of silently repairing it.
"""

from dataclasses import dataclass

from eventdesk.core.errors import CapacityError, ValidationError
from eventdesk.core.logging import get_logger
from eventdesk.core.metrics import record_allocation
from eventdesk.models import Event, InventoryItem
from eventdesk.store.entity_store import EntityStore

logger = get_logger(__name__)


def allocate(item: InventoryItem, event: Event, qty: int) -> None:
    """
    Reserve `qty` of `item` for `event`.

    Raises:
        ValidationError: qty is not positive
        CapacityError: qty exceeds the item's available quantity
    """
    if qty <= 0:
        record_allocation(False)
        raise ValidationError("Quantity must be positive")

    if qty > item.available_quantity:
        record_allocation(False)
        logger.warning(
            "allocation_rejected",
            item_id=item.item_id,
            event_id=event.id,
            requested=qty,
            available=item.available_quantity,
        )
        raise CapacityError(
            f"Not enough {item.name}. Requested: {qty}, Available: {item.available_quantity}"
        )

    item.allocated_quantity += qty
    event.allocated_inventory[item.item_id] = event.allocated_for(item.item_id) + qty
    record_allocation(True)

    logger.info(
        "inventory_allocated",
        item_id=item.item_id,
        event_id=event.id,
        quantity=qty,
        available=item.available_quantity,
    )


def deallocate(item: InventoryItem, event: Event, qty: int) -> int:
    """
    Return up to `qty` of `item` from `event` to the item's pool.
    Returns the amount actually removed (0 when the event holds none).
    """
    if qty <= 0:
        raise ValidationError("Quantity must be positive")

    held = event.allocated_for(item.item_id)
    removed = min(qty, held)
    if removed == 0:
        return 0

    remaining = held - removed
    if remaining:
        event.allocated_inventory[item.item_id] = remaining
    else:
        del event.allocated_inventory[item.item_id]
    # Never drive the global count negative, even if files drifted
    item.allocated_quantity = max(0, item.allocated_quantity - removed)

    logger.info(
        "inventory_deallocated",
        item_id=item.item_id,
        event_id=event.id,
        requested=qty,
        removed=removed,
        available=item.available_quantity,
    )
    return removed


def set_total_quantity(item: InventoryItem, new_total: int) -> None:
    """Resize an item's stock; it cannot shrink below what is already allocated."""
    if new_total < 0:
        raise ValidationError("Total quantity cannot be negative")
    if new_total < item.allocated_quantity:
        raise ValidationError(
            f"Total quantity {new_total} is below the {item.allocated_quantity} already allocated"
        )
    old_total = item.total_quantity
    item.total_quantity = new_total
    logger.info("inventory_total_changed", item_id=item.item_id, old=old_total, new=new_total)


def release_event(store: EntityStore, event: Event) -> dict[int, int]:
    """
    Deallocate everything an event holds. Returns {item_id: released qty}.
    Entries pointing at items that no longer exist are dropped.
    """
    released: dict[int, int] = {}
    for item_id, qty in list(event.allocated_inventory.items()):
        item = store.inventory.find_by_id(item_id)
        if item is None:
            logger.warning("allocation_orphaned", event_id=event.id, item_id=item_id, quantity=qty)
            del event.allocated_inventory[item_id]
            continue
        released[item_id] = deallocate(item, event, qty)
    return released


@dataclass
class LedgerDrift:
    item_id: int
    item_name: str
    recorded: int  # item.allocated_quantity
    from_events: int  # sum over events


def audit(store: EntityStore) -> list[LedgerDrift]:
    """Items whose global allocated quantity disagrees with the events' ledgers."""
    sums: dict[int, int] = {}
    for event in store.events:
        for item_id, qty in event.allocated_inventory.items():
            sums[item_id] = sums.get(item_id, 0) + qty

    drift = []
    for item in store.inventory:
        from_events = sums.pop(item.item_id, 0)
        if from_events != item.allocated_quantity:
            drift.append(LedgerDrift(item.item_id, item.name, item.allocated_quantity, from_events))
    # Allocations naming items that do not exist at all
    for item_id, from_events in sums.items():
        drift.append(LedgerDrift(item_id, "Unknown", 0, from_events))
    return drift
