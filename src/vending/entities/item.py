"""Purchasable item entity."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from vending.core.money import Currency


@dataclass(frozen=True)
class Item:
    item_id: int
    name: str
    price: Decimal

    def __post_init__(self) -> None:
        if isinstance(self.item_id, bool) or not isinstance(self.item_id, int):
            raise ValueError(f"item_id must be an integer, got {self.item_id!r}")
        if not isinstance(self.name, str) or not self.name.strip():
            raise ValueError("name must be a non-empty string")
        if not isinstance(self.price, Decimal) or not self.price.is_finite():
            raise ValueError(f"price must be a finite Decimal, got {self.price!r}")
        if self.price < 0:
            raise ValueError("price must be non-negative")

    def label(self, currency: Currency) -> str:
        return f"{self.item_id}. {self.name} - {currency.format(self.price)}"
