"""Ordered stock of purchasable items."""

from __future__ import annotations

from decimal import Decimal
from typing import Iterable

from vending.entities.item import Item


class DuplicateItemError(ValueError):
    """Raised when an item id is already present in the inventory."""


class Inventory:
    def __init__(self) -> None:
        self._items: list[Item] = []

    @classmethod
    def from_items(cls, items: Iterable[Item]) -> "Inventory":
        inventory = cls()
        for item in items:
            inventory._append(item)
        return inventory

    def find(self, item_id: int) -> Item | None:
        if not _is_item_id(item_id):
            return None
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    def add(self, item_id: int, name: str, price: Decimal) -> Item:
        item = Item(item_id=item_id, name=name, price=price)
        self._append(item)
        return item

    def remove(self, item_id: int) -> bool:
        item = self.find(item_id)
        if item is None:
            return False
        self._items.remove(item)
        return True

    def list(self) -> list[Item]:
        return list(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, item_id: object) -> bool:
        return self.find(item_id) is not None

    def _append(self, item: Item) -> None:
        if item.item_id in self:
            raise DuplicateItemError(f"Duplicate item id: {item.item_id}")
        self._items.append(item)


def _is_item_id(value: object) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)

