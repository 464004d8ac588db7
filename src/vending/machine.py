"""Vending controller: purchases and stock changes against one register."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal

from vending.config import MachineConfig, load_machine_config
from vending.core.event_bus import EventBus
from vending.core.money import Currency
from vending.core.outcomes import PurchaseStatus, StockStatus
from vending.entities.item import Item
from vending.systems.cash_register import CashRegister
from vending.systems.inventory import Inventory

logger = logging.getLogger(__name__)


@dataclass
class PurchaseResult:
    status: PurchaseStatus
    item: Item | None = None
    change: Decimal = Decimal("0")
    dispensed: dict[Decimal, int] = field(default_factory=dict)
    undispensed: Decimal = Decimal("0")

    @property
    def succeeded(self) -> bool:
        return self.status == PurchaseStatus.PURCHASE_SUCCEEDED


@dataclass
class StockResult:
    status: StockStatus
    item_id: int
    item: Item | None = None


class VendingMachine:
    """In-memory vending machine built from an inventory and a cash register."""

    def __init__(
        self,
        register: CashRegister,
        inventory: Inventory,
        currency: Currency,
        events: EventBus | None = None,
    ) -> None:
        self.register = register
        self.inventory = inventory
        self.currency = currency
        self.events = events or register.events
        register.events = self.events

    @classmethod
    def from_config(cls, config: MachineConfig | None = None, currency_symbol: str | None = None) -> "VendingMachine":
        config = config or load_machine_config()
        currency = Currency(config.currency_symbol if currency_symbol is None else currency_symbol)
        events = EventBus()
        register = CashRegister(
            ledger=config.ledger(),
            total=config.initial_total,
            currency=currency,
            events=events,
        )
        inventory = Inventory.from_items(
            Item(item_id=entry.item_id, name=entry.name, price=entry.price) for entry in config.catalog
        )
        return cls(register=register, inventory=inventory, currency=currency, events=events)

    def list_items(self) -> list[Item]:
        return self.inventory.list()

    def select_item(self, item_id: int, tendered: Decimal | int) -> PurchaseResult:
        item = self.inventory.find(item_id)
        if item is None:
            return self._reject(PurchaseStatus.ITEM_NOT_FOUND, item_id=item_id)

        amount = _as_amount(tendered)
        if amount is None or amount < 0:
            return self._reject(
                PurchaseStatus.INVALID_AMOUNT, item=item, item_id=item_id, tendered=str(tendered)
            )

        if amount < item.price:
            return self._reject(
                PurchaseStatus.INSUFFICIENT_FUNDS,
                item=item,
                item_id=item_id,
                price=str(item.price),
                tendered=str(amount),
            )

        change = self.register.compute_and_dispense_change(item.price, amount)
        dispense = self.register.last_dispense
        logger.info(
            "Sold %s for %s, change %s",
            item.name,
            self.currency.format(item.price),
            self.currency.format(change),
        )
        self.events.emit(
            "purchase_completed",
            item_id=item.item_id,
            price=str(item.price),
            tendered=str(amount),
            change=str(change),
            total=str(self.register.total),
        )
        return PurchaseResult(
            status=PurchaseStatus.PURCHASE_SUCCEEDED,
            item=item,
            change=change,
            dispensed=dict(dispense.coins) if dispense else {},
            undispensed=dispense.undispensed if dispense else Decimal("0"),
        )

    def add_stock_item(self, item_id: int, name: str, price: Decimal | int) -> StockResult:
        if item_id in self.inventory:
            logger.info("Rejected stock item %s: id already in use", item_id)
            return StockResult(status=StockStatus.DUPLICATE_ID, item_id=item_id, item=self.inventory.find(item_id))

        amount = _as_amount(price)
        item = self.inventory.add(item_id, name, price if amount is None else amount)
        logger.info("Added new item: %s - %s", item.name, self.currency.format(item.price))
        self.events.emit("item_added", item_id=item.item_id, name=item.name, price=str(item.price))
        return StockResult(status=StockStatus.ADDED, item_id=item_id, item=item)

    def remove_stock_item(self, item_id: int) -> StockResult:
        item = self.inventory.find(item_id)
        if not self.inventory.remove(item_id):
            logger.info("Item with ID %s not found in stock", item_id)
            return StockResult(status=StockStatus.NOT_FOUND, item_id=item_id)

        logger.info("Removed item with ID %s from stock", item_id)
        self.events.emit("item_removed", item_id=item_id)
        return StockResult(status=StockStatus.REMOVED, item_id=item_id, item=item)

    def snapshot(self) -> dict[str, str | int | dict[str, int]]:
        return {
            "currency": self.currency.symbol,
            "total": str(self.register.total),
            "coins": {str(face): self.register.coin_count(face) for face in self.register.denominations},
            "coin_value": str(self.register.coin_value()),
            "items": len(self.inventory),
        }

    def _reject(self, status: PurchaseStatus, item: Item | None = None, **payload: object) -> PurchaseResult:
        logger.info("Purchase rejected: %s %s", status.value, payload)
        self.events.emit("purchase_rejected", reason=status.value, **payload)
        return PurchaseResult(status=status, item=item)


def _as_amount(value: object) -> Decimal | None:
    # Floats and bools are malformed here; amounts arrive as Decimal or whole units.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, Decimal) and value.is_finite():
        return value
    return None
