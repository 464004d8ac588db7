from decimal import Decimal

import pytest

from vending.core.money import Currency
from vending.entities.item import Item
from vending.systems.inventory import DuplicateItemError, Inventory


def _inventory() -> Inventory:
    return Inventory.from_items(
        [
            Item(item_id=1, name="Cola", price=Decimal("1.50")),
            Item(item_id=2, name="Crisps", price=Decimal("1.25")),
        ]
    )


def test_find_and_not_found() -> None:
    inventory = _inventory()
    assert inventory.find(2).name == "Crisps"
    assert inventory.find(99) is None


def test_add_lists_item_once_in_insertion_order() -> None:
    inventory = _inventory()
    inventory.add(3, "Sprite", Decimal("1.00"))
    listed = inventory.list()
    assert [item.item_id for item in listed] == [1, 2, 3]
    assert [item.item_id for item in inventory.list()] == [1, 2, 3]

    listed.clear()
    assert len(inventory) == 3


def test_duplicate_id_rejected() -> None:
    inventory = _inventory()
    with pytest.raises(DuplicateItemError):
        inventory.add(1, "Other Cola", Decimal("2.00"))
    assert len(inventory) == 2


def test_remove() -> None:
    inventory = _inventory()
    assert inventory.remove(1)
    assert 1 not in inventory
    assert not inventory.remove(1)
    assert [item.item_id for item in inventory.list()] == [2]


def test_item_validation() -> None:
    with pytest.raises(ValueError):
        Item(item_id=1, name="", price=Decimal("1.00"))
    with pytest.raises(ValueError):
        Item(item_id=1, name="Cola", price=Decimal("-0.01"))
    with pytest.raises(ValueError):
        Item(item_id=1, name="Cola", price=1.5)
    free = Item(item_id=4, name="Water", price=Decimal("0"))
    assert free.label(Currency("£")) == "4. Water - £0.00"


def test_from_items_rejects_duplicate_ids() -> None:
    with pytest.raises(DuplicateItemError):
        Inventory.from_items(
            [
                Item(item_id=1, name="Cola", price=Decimal("1.50")),
                Item(item_id=1, name="Diet Cola", price=Decimal("1.50")),
            ]
        )


def test_find_ignores_non_integer_ids() -> None:
    inventory = _inventory()
    assert inventory.find(True) is None
    assert inventory.find(1.0) is None
    assert True not in inventory
    assert not inventory.remove(1.0)
    assert len(inventory) == 2
