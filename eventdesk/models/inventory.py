"""
Inventory item with global allocation tracking.

Key design decisions:
- `allocated_quantity` is the sum promised out to events; it only changes
  through the allocation ledger
- `available_quantity` is derived, never stored
- Name uniqueness is soft: enforced by a case-insensitive lookup before insert
"""

from dataclasses import dataclass


@dataclass
class InventoryItem:
    name: str
    total_quantity: int
    description: str = ""
    allocated_quantity: int = 0
    item_id: int = 0

    @property
    def id(self) -> int:
        return self.item_id

    @id.setter
    def id(self, value: int) -> None:
        self.item_id = value

    @property
    def available_quantity(self) -> int:
        return self.total_quantity - self.allocated_quantity

    def __repr__(self) -> str:
        return (
            f"<InventoryItem(id={self.item_id}, name={self.name}, "
            f"available={self.available_quantity}/{self.total_quantity})>"
        )
