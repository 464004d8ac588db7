"""Cash register: collected total, coin ledger and greedy change dispensing."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from decimal import Decimal, ROUND_FLOOR
from threading import Lock

from vending.core.event_bus import EventBus
from vending.core.money import Currency

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


@dataclass
class DispenseResult:
    requested: Decimal
    coins: dict[Decimal, int] = field(default_factory=dict)
    undispensed: Decimal = ZERO

    @property
    def dispensed_value(self) -> Decimal:
        return sum((face * count for face, count in self.coins.items()), ZERO)

    @property
    def is_complete(self) -> bool:
        return self.undispensed == 0


class CashRegister:
    """Collects item prices and pays change out of a finite coin ledger.

    Change is paid greedily, largest face value first. A tier is used only when
    its stock covers every coin the tier would contribute; otherwise it is
    skipped and the remainder moves on untouched. Whatever cannot be paid is
    left undispensed without failing the sale.
    """

    def __init__(
        self,
        ledger: dict[Decimal, int],
        total: Decimal = ZERO,
        currency: Currency | None = None,
        events: EventBus | None = None,
    ) -> None:
        if total < 0:
            raise ValueError("total must be non-negative")
        for face, count in ledger.items():
            if face <= 0:
                raise ValueError(f"Denomination must be positive: {face}")
            if count < 0:
                raise ValueError(f"Coin count must be non-negative: {face} -> {count}")
        self._total = total
        self._ledger = {face: ledger[face] for face in sorted(ledger, reverse=True)}
        self.currency = currency or Currency("")
        self.events = events or EventBus()
        self.last_dispense: DispenseResult | None = None
        self._lock = Lock()

    @property
    def total(self) -> Decimal:
        return self._total

    @property
    def ledger(self) -> dict[Decimal, int]:
        return dict(self._ledger)

    @property
    def denominations(self) -> list[Decimal]:
        return list(self._ledger)

    def coin_count(self, face: Decimal) -> int:
        return self._ledger.get(face, 0)

    def coin_value(self) -> Decimal:
        return sum((face * count for face, count in self._ledger.items()), ZERO)

    def compute_and_dispense_change(self, price: Decimal, tendered: Decimal) -> Decimal:
        # Caller guarantees tendered >= price.
        with self._lock:
            change = tendered - price
            if change > 0:
                logger.info("Change given: %s", self.currency.format(change))
                self.last_dispense = self._dispense(change)
            else:
                self.last_dispense = DispenseResult(requested=change)
            self._total += price
            return change

    def _dispense(self, change: Decimal) -> DispenseResult:
        result = DispenseResult(requested=change)
        remaining = change
        for face, stock in self._ledger.items():
            needed = int((remaining / face).to_integral_value(rounding=ROUND_FLOOR))
            if needed > 0 and stock >= needed:
                logger.debug("Dispensing %d x %s coins", needed, self.currency.format(face))
                self._ledger[face] = stock - needed
                remaining -= face * needed
                result.coins[face] = needed
            elif needed > 0:
                logger.debug("Skipping %s tier: need %d, have %d", self.currency.format(face), needed, stock)

        result.undispensed = remaining
        if result.coins:
            self.events.emit(
                "coins_dispensed",
                coins={str(face): count for face, count in result.coins.items()},
                value=str(result.dispensed_value),
            )
        if remaining > 0:
            logger.warning(
                "Could not dispense %s of %s change",
                self.currency.format(remaining),
                self.currency.format(change),
            )
            self.events.emit("change_shortfall", requested=str(change), undispensed=str(remaining))
        return result
