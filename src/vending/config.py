"""Config loading and validation for a vending machine instance."""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
import json

from vending.core.money import to_decimal


@dataclass
class CoinStock:
    face_value: Decimal
    count: int


@dataclass
class CatalogEntry:
    item_id: int
    name: str
    price: Decimal


@dataclass
class MachineConfig:
    currency_symbol: str
    initial_total: Decimal
    coins: list[CoinStock]
    catalog: list[CatalogEntry]

    def ledger(self) -> dict[Decimal, int]:
        return {coin.face_value: coin.count for coin in self.coins}


DEFAULT_DATA_DIR = Path(__file__).resolve().parent / "data"
DEFAULT_CONFIG_PATH = DEFAULT_DATA_DIR / "machine.json"


def _load_json(path: Path) -> dict | list:
    if not path.exists():
        raise ValueError(f"Missing config file: {path}")
    return json.loads(path.read_text(encoding="utf-8"))


def _require_int(value: object, context: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{context}: expected an integer, got {value!r}")
    return value


def _require_keys(data: dict, keys: set[str], context: str) -> None:
    if not isinstance(data, dict):
        raise ValueError(f"{context}: expected an object, got {type(data).__name__}")
    missing = keys - set(data.keys())
    if missing:
        raise ValueError(f"{context}: missing keys {sorted(missing)}")


def load_machine_config(path: Path | None = None) -> MachineConfig:
    raw = _load_json(path or DEFAULT_CONFIG_PATH)
    _require_keys(raw, {"currency_symbol", "initial_total", "coins", "catalog"}, "machine")

    initial_total = to_decimal(raw["initial_total"])
    if initial_total < 0:
        raise ValueError("initial_total must be non-negative")

    coins: list[CoinStock] = []
    for coin in raw["coins"]:
        _require_keys(coin, {"face_value", "count"}, f"coin {coin!r}")
        stock = CoinStock(
            face_value=to_decimal(coin["face_value"]),
            count=_require_int(coin["count"], f"count for {coin['face_value']}"),
        )
        if stock.face_value <= 0:
            raise ValueError(f"face_value must be positive: {stock.face_value}")
        if stock.count < 0:
            raise ValueError(f"count must be non-negative for {stock.face_value}")
        if any(existing.face_value == stock.face_value for existing in coins):
            raise ValueError(f"Duplicate denomination: {stock.face_value}")
        coins.append(stock)
    if not coins:
        raise ValueError("At least one coin denomination is required")

    catalog: list[CatalogEntry] = []
    for entry in raw["catalog"]:
        _require_keys(entry, {"id", "name", "price"}, f"catalog entry {entry!r}")
        item = CatalogEntry(
            item_id=_require_int(entry["id"], "catalog id"),
            name=str(entry["name"]),
            price=to_decimal(entry["price"]),
        )
        if any(existing.item_id == item.item_id for existing in catalog):
            raise ValueError(f"Duplicate catalog id: {item.item_id}")
        catalog.append(item)

    return MachineConfig(
        currency_symbol=str(raw["currency_symbol"]),
        initial_total=initial_total,
        coins=sorted(coins, key=lambda c: c.face_value, reverse=True),
        catalog=catalog,
    )
