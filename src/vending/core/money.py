"""Currency display and fixed-point amount helpers."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation


@dataclass(frozen=True)
class Currency:
    symbol: str

    def format(self, amount: Decimal) -> str:
        return f"{self.symbol}{amount:.2f}"


def to_decimal(value: object) -> Decimal:
    """Coerce a config value to Decimal, going through ``str`` so floats never leak in."""
    if isinstance(value, bool):
        raise ValueError(f"Not a monetary amount: {value!r}")
    try:
        amount = Decimal(str(value))
    except InvalidOperation as exc:
        raise ValueError(f"Not a monetary amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValueError(f"Not a monetary amount: {value!r}")
    return amount


def parse_amount(text: str, currency: Currency | None = None) -> Decimal | None:
    cleaned = text.strip()
    if currency is not None and currency.symbol:
        cleaned = cleaned.replace(currency.symbol, "").strip()
    try:
        return to_decimal(cleaned)
    except ValueError:
        return None
