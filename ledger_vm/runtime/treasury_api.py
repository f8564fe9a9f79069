"""
ledger_vm.runtime.treasury_api — native value as seen by contracts.

- balance() -> int                 # this contract's native balance
- balance_of(addr: bytes) -> int   # any address, read-only
- transfer(to: bytes, amount: int) # debit self, credit recipient
- try_transfer(to, amount) -> bool  # same, reporting rejection instead of raising

Sending value to a contract runs the recipient's `receive(caller)` hook; a
contract without one rejects the transfer, which surfaces as a failed call.
"""

from __future__ import annotations

from .context import active_engine, to_address


def _check_amount(amount: int) -> int:
    if not isinstance(amount, int) or isinstance(amount, bool):
        raise TypeError("amount must be int")
    if amount < 0:
        raise ValueError("amount must be non-negative")
    return amount


def balance() -> int:
    eng = active_engine()
    return eng.balance_of(eng.current_frame().address)


def balance_of(addr: bytes) -> int:
    return active_engine().balance_of(to_address(addr))


def transfer(to: bytes, amount: int) -> None:
    active_engine().transfer_value(to, _check_amount(amount))


def try_transfer(to: bytes, amount: int) -> bool:
    """Like `transfer` but reports a rejected transfer as False."""
    return active_engine().try_transfer_value(to, _check_amount(amount))


__all__ = ["balance", "balance_of", "transfer", "try_transfer"]
