from decimal import Decimal

import pytest

from vending.systems.cash_register import CashRegister

FACES = ["2.00", "1.00", "0.50", "0.20", "0.10", "0.05", "0.02", "0.01"]


def _full_ledger(count: int = 10) -> dict[Decimal, int]:
    return {Decimal(face): count for face in FACES}


def test_single_coin_change() -> None:
    register = CashRegister(ledger=_full_ledger())
    change = register.compute_and_dispense_change(Decimal("1.50"), Decimal("2.00"))

    assert change == Decimal("0.50")
    assert register.last_dispense.coins == {Decimal("0.50"): 1}
    assert register.coin_count(Decimal("0.50")) == 9
    assert register.total == Decimal("1.50")


def test_mixed_coin_change() -> None:
    register = CashRegister(ledger=_full_ledger())
    change = register.compute_and_dispense_change(Decimal("1.25"), Decimal("2.00"))

    assert change == Decimal("0.75")
    assert register.last_dispense.coins == {
        Decimal("0.50"): 1,
        Decimal("0.20"): 1,
        Decimal("0.05"): 1,
    }
    assert register.last_dispense.is_complete
    ledger = register.ledger
    assert ledger[Decimal("0.50")] == 9
    assert ledger[Decimal("0.20")] == 9
    assert ledger[Decimal("0.05")] == 9
    assert ledger[Decimal("0.10")] == 10


def test_exact_payment_dispenses_nothing() -> None:
    register = CashRegister(ledger=_full_ledger())
    change = register.compute_and_dispense_change(Decimal("1.00"), Decimal("1.00"))

    assert change == 0
    assert register.last_dispense.coins == {}
    assert register.ledger == _full_ledger()
    assert register.total == Decimal("1.00")
    assert register.events.events == []


def test_shortfall_is_silent() -> None:
    ledger = {Decimal(face): 0 for face in FACES}
    ledger[Decimal("2.00")] = 5
    ledger[Decimal("1.00")] = 5
    register = CashRegister(ledger=ledger)

    change = register.compute_and_dispense_change(Decimal("1.00"), Decimal("1.75"))

    assert change == Decimal("0.75")
    assert register.last_dispense.coins == {}
    assert register.last_dispense.undispensed == Decimal("0.75")
    assert register.ledger == ledger
    assert register.total == Decimal("1.00")
    assert register.events.names() == ["change_shortfall"]


def test_tier_is_skipped_when_stock_cannot_cover_it() -> None:
    register = CashRegister(
        ledger={Decimal("0.50"): 0, Decimal("0.20"): 2, Decimal("0.10"): 10},
    )
    register.compute_and_dispense_change(Decimal("0.40"), Decimal("1.00"))

    # Three 0.20 coins would be needed, only two are stocked.
    assert register.last_dispense.coins == {Decimal("0.10"): 6}
    assert register.coin_count(Decimal("0.20")) == 2
    assert register.coin_count(Decimal("0.10")) == 4


def test_greedy_dispense_is_deterministic() -> None:
    first = CashRegister(ledger=_full_ledger(3))
    second = CashRegister(ledger=_full_ledger(3))

    first.compute_and_dispense_change(Decimal("0.13"), Decimal("5.00"))
    second.compute_and_dispense_change(Decimal("0.13"), Decimal("5.00"))

    assert first.last_dispense == second.last_dispense
    assert list(first.last_dispense.coins) == sorted(first.last_dispense.coins, reverse=True)


def test_counts_never_negative_under_repeated_sales() -> None:
    register = CashRegister(ledger=_full_ledger(2))
    for _ in range(25):
        register.compute_and_dispense_change(Decimal("0.01"), Decimal("3.99"))
        assert all(count >= 0 for count in register.ledger.values())
    assert register.total == Decimal("0.25")


def test_dispensed_value_plus_remainder_equals_change() -> None:
    register = CashRegister(ledger=_full_ledger(1))
    change = register.compute_and_dispense_change(Decimal("4.91"), Decimal("5.00"))

    result = register.last_dispense
    assert result.coins == {Decimal("0.05"): 1}
    assert result.undispensed == Decimal("0.04")
    assert result.dispensed_value + result.undispensed == change


def test_invalid_ledger_rejected() -> None:
    with pytest.raises(ValueError):
        CashRegister(ledger={Decimal("0.10"): -1})
    with pytest.raises(ValueError):
        CashRegister(ledger={Decimal("0"): 3})
    with pytest.raises(ValueError):
        CashRegister(ledger={Decimal("0.10"): 1}, total=Decimal("-1"))


def test_denominations_sorted_largest_first() -> None:
    register = CashRegister(ledger={Decimal("0.05"): 1, Decimal("1.00"): 2, Decimal("0.20"): 3})

    assert register.denominations == [Decimal("1.00"), Decimal("0.20"), Decimal("0.05")]
    assert list(register.ledger) == register.denominations
