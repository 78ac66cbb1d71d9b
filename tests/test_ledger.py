"""
Tests for the allocation ledger, including the invariant that an item's
allocated quantity equals the sum of every event's allocation of it.
"""

import pytest
from prometheus_client import REGISTRY

from eventdesk.core.errors import CapacityError, ValidationError
from eventdesk.models import Event, InventoryItem
from eventdesk.services import event_service, ledger


def _sample(name, labels):
    return REGISTRY.get_sample_value(name, labels) or 0.0


def _assert_consistent(store):
    for item in store.inventory:
        from_events = sum(e.allocated_for(item.item_id) for e in store.events)
        assert item.allocated_quantity == from_events
        assert item.available_quantity >= 0
    assert ledger.audit(store) == []


def test_chairs_scenario(store, test_event, chairs):
    """Allocate 30, over-allocate 80 (rejected), deallocate 20."""
    ledger.allocate(chairs, test_event, 30)
    assert chairs.available_quantity == 70
    assert test_event.allocated_inventory == {chairs.item_id: 30}

    with pytest.raises(CapacityError):
        ledger.allocate(chairs, test_event, 80)
    assert chairs.available_quantity == 70
    assert test_event.allocated_inventory == {chairs.item_id: 30}

    removed = ledger.deallocate(chairs, test_event, 20)
    assert removed == 20
    assert chairs.available_quantity == 90
    assert test_event.allocated_inventory == {chairs.item_id: 10}
    _assert_consistent(store)


def test_allocate_rejects_non_positive_quantity(test_event, chairs):
    with pytest.raises(ValidationError):
        ledger.allocate(chairs, test_event, 0)
    assert chairs.allocated_quantity == 0
    assert test_event.allocated_inventory == {}


def test_allocate_exactly_available(test_event, chairs):
    ledger.allocate(chairs, test_event, 100)
    assert chairs.available_quantity == 0


def test_deallocate_clamps_and_removes_entry(store, test_event, chairs):
    ledger.allocate(chairs, test_event, 15)
    assert ledger.deallocate(chairs, test_event, 50) == 15
    assert chairs.item_id not in test_event.allocated_inventory
    assert chairs.allocated_quantity == 0


def test_deallocate_unallocated_item_returns_zero(test_event, chairs):
    assert ledger.deallocate(chairs, test_event, 5) == 0
    assert chairs.allocated_quantity == 0


def test_set_total_quantity_cannot_drop_below_allocated(test_event, chairs):
    ledger.allocate(chairs, test_event, 40)
    with pytest.raises(ValidationError):
        ledger.set_total_quantity(chairs, 39)
    with pytest.raises(ValidationError):
        ledger.set_total_quantity(chairs, -1)
    ledger.set_total_quantity(chairs, 40)
    assert chairs.total_quantity == 40
    assert chairs.available_quantity == 0


def test_delete_event_releases_allocations(store, chairs):
    """Deleting event 7 holding {3: 5} lowers item 3's allocation by 5."""
    tables = store.inventory.insert(InventoryItem(item_id=3, name="Tables", total_quantity=20))
    other = store.events.insert(Event(id=6, name="Other", date="2026-02-01", time="10:00"))
    doomed = store.events.insert(Event(id=7, name="Doomed", date="2026-02-02", time="10:00"))
    ledger.allocate(tables, other, 4)
    ledger.allocate(tables, doomed, 5)
    assert tables.allocated_quantity == 9

    event_service.delete_event(store, 7)

    assert tables.allocated_quantity == 4
    assert store.events.find_by_id(7) is None
    _assert_consistent(store)


def test_invariant_holds_over_mixed_operations(store, chairs):
    projector = store.inventory.insert(InventoryItem(name="Projector", total_quantity=3))
    events = [
        store.events.insert(Event(name=f"E{i}", date="2026-04-0" + str(i), time="10:00"))
        for i in range(1, 4)
    ]
    ledger.allocate(chairs, events[0], 30)
    ledger.allocate(chairs, events[1], 50)
    ledger.allocate(projector, events[1], 2)
    with pytest.raises(CapacityError):
        ledger.allocate(chairs, events[2], 21)
    ledger.allocate(chairs, events[2], 20)
    ledger.deallocate(chairs, events[1], 10)
    ledger.allocate(projector, events[0], 1)
    event_service.delete_event(store, events[1].id)
    ledger.deallocate(projector, events[0], 5)

    _assert_consistent(store)
    assert chairs.allocated_quantity == 50
    assert projector.allocated_quantity == 0


def test_release_event_drops_orphaned_entries(store, test_event):
    test_event.allocated_inventory[99] = 4
    assert ledger.release_event(store, test_event) == {}
    assert test_event.allocated_inventory == {}


def test_audit_reports_drift_from_hand_edited_files(store, test_event, chairs):
    chairs.allocated_quantity = 12  # nothing in any event backs this
    test_event.allocated_inventory[55] = 2
    drift = ledger.audit(store)
    assert {(d.item_id, d.recorded, d.from_events) for d in drift} == {
        (chairs.item_id, 12, 0),
        (55, 0, 2),
    }


def test_allocation_metrics_count_outcomes(test_event, chairs):
    allocated_before = _sample("allocation_attempts_total", {"result": "allocated"})
    rejected_before = _sample("allocation_attempts_total", {"result": "rejected"})

    ledger.allocate(chairs, test_event, 10)
    with pytest.raises(CapacityError):
        ledger.allocate(chairs, test_event, 1000)

    assert _sample("allocation_attempts_total", {"result": "allocated"}) == allocated_before + 1
    assert _sample("allocation_attempts_total", {"result": "rejected"}) == rejected_before + 1
