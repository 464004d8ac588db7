"""CLI entry point: interactive menu over the vending machine core."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Callable

from vending.config import load_machine_config
from vending.core.logger import setup_logger
from vending.core.money import parse_amount
from vending.core.outcomes import PurchaseStatus, StockStatus
from vending.machine import VendingMachine

InputFn = Callable[[str], str]
OutputFn = Callable[[str], None]

logger = logging.getLogger("vending.cli")

MENU = """
Main Menu:
1. Choose an item
2. Add stock
3. Remove stock
4. Exit"""


def _parse_int(text: str) -> int | None:
    try:
        return int(text.strip())
    except ValueError:
        return None


def display_stock(machine: VendingMachine, output_fn: OutputFn) -> None:
    output_fn("Available items:")
    for item in machine.list_items():
        output_fn(item.label(machine.currency))


def _choose_item(machine: VendingMachine, input_fn: InputFn, output_fn: OutputFn) -> None:
    display_stock(machine, output_fn)
    item_id = _parse_int(input_fn("Enter the item number you want to purchase: "))
    if item_id is None:
        output_fn("Invalid input. Please enter a valid item number.")
        return

    item = machine.inventory.find(item_id)
    if item is None:
        output_fn("Invalid item selection.")
        return
    output_fn(f"You have selected: {item.name} - {machine.currency.format(item.price)}")

    fmt = machine.currency.format
    raw = input_fn(f"Enter how you are paying (e.g., '{fmt(item.price)}', '{machine.currency.symbol}2.00', etc.): ")
    amount = parse_amount(raw, machine.currency)
    if amount is None:
        output_fn("Invalid payment amount. Please enter a valid decimal value.")
        return

    result = machine.select_item(item_id, amount)
    if result.status == PurchaseStatus.PURCHASE_SUCCEEDED:
        for face, count in result.dispensed.items():
            output_fn(f"Dispensing {count} x {fmt(face)} coins")
        output_fn(f"Payment successful. Change: {fmt(result.change)}")
    elif result.status == PurchaseStatus.INSUFFICIENT_FUNDS:
        output_fn("Insufficient funds. Please insert more coins.")
    elif result.status == PurchaseStatus.INVALID_AMOUNT:
        output_fn("Invalid payment amount. Please enter a valid decimal value.")
    else:
        output_fn("Invalid item selection.")


def _add_stock(machine: VendingMachine, input_fn: InputFn, output_fn: OutputFn) -> None:
    output_fn("\nAdding a new stock item:")
    item_id = _parse_int(input_fn("Enter item ID: "))
    if item_id is None:
        output_fn("Invalid input. Please enter a valid item number.")
        return
    name = input_fn("Enter item name: ").strip()
    price = parse_amount(input_fn(f"Enter item price ({machine.currency.symbol}): "), machine.currency)
    if price is None:
        output_fn("Invalid price. Please enter a valid decimal value.")
        return

    try:
        result = machine.add_stock_item(item_id, name, price)
    except ValueError as exc:
        output_fn(f"Could not add item: {exc}")
        return

    if result.status == StockStatus.DUPLICATE_ID:
        output_fn(f"Item with ID {item_id} already exists.")
        return
    output_fn(f"Added new item: {name} - {machine.currency.format(price)}")
    output_fn("\nUpdated stock:")
    display_stock(machine, output_fn)


def _remove_stock(machine: VendingMachine, input_fn: InputFn, output_fn: OutputFn) -> None:
    output_fn("\nRemoving stock item:")
    item_id = _parse_int(input_fn("Enter item ID to remove: "))
    if item_id is None:
        output_fn("Invalid input. Please enter a valid item number.")
        return

    if machine.remove_stock_item(item_id).status == StockStatus.REMOVED:
        output_fn(f"Removed item with ID {item_id} from stock.")
    else:
        output_fn(f"Item with ID {item_id} not found in stock.")
    output_fn("\nUpdated stock:")
    display_stock(machine, output_fn)


def run(machine: VendingMachine, input_fn: InputFn = input, output_fn: OutputFn = print) -> None:
    actions = {1: _choose_item, 2: _add_stock, 3: _remove_stock}
    while True:
        output_fn(MENU)
        try:
            raw = input_fn("Enter your choice (1-4): ")
        except EOFError:
            return
        choice = _parse_int(raw)
        if choice is None:
            output_fn("Invalid input. Please enter a number between 1 and 4.")
            continue
        if choice == 4:
            return
        action = actions.get(choice)
        if action is None:
            output_fn("Invalid choice. Please enter a number between 1 and 4.")
            continue
        action(machine, input_fn, output_fn)
        for event in machine.events.drain():
            logger.debug("%s %s", event.name, event.payload)


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="vending", description="Single-unit vending machine")
    parser.add_argument("--config", type=Path, default=None, help="machine config JSON")
    parser.add_argument("--currency", default=None, help="currency display symbol")
    parser.add_argument("--log-level", default="WARNING")
    parser.add_argument("--log-file", default=None)
    args = parser.parse_args(argv)

    setup_logger("vending", level=args.log_level, log_file=args.log_file)

    print("================================")
    print("Welcome to the Vending Machine!")
    print("================================")

    symbol = args.currency
    if symbol is None:
        try:
            symbol = input("Enter the currency symbol: ").strip()
        except EOFError:
            symbol = ""

    machine = VendingMachine.from_config(load_machine_config(args.config), currency_symbol=symbol or None)
    run(machine, input_fn=input, output_fn=print)


if __name__ == "__main__":
    main()
