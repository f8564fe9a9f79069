# -*- coding: utf-8 -*-
"""
Fungible token ledger (ERC-20-like)
===================================

Deterministic, float-free, storage-backed balances and allowances for Python
contracts. Entry-point modules (the ledger template, the example fee token)
wrap these functions with their own initialization and pause gates.

Highlights
----------
- Explicit `caller` parameters for mutating calls; the engine injects the
  authenticated caller at the contract boundary.
- Deterministic storage layout using prefixes from `contracts.stdlib.token`.
- Events emitted via `ledger_vm.stdlib.events`:
    - b"Transfer" {"from": bytes, "to": bytes, "value": int}
    - b"Approval" {"owner": bytes, "spender": bytes, "value": int}
- U256-checked math via `contracts.stdlib.math.safe_uint` (no silent wrap).
- A single `update(frm, to, amount)` primitive moves value; a null `frm`
  mints, a null `to` burns. Every path emits exactly one Transfer.

Public interface (ABI sketch)
-----------------------------
# metadata (pure)
name() -> bytes
symbol() -> bytes
decimals() -> int
total_supply() -> int
balance_of(addr: bytes) -> int
allowance(owner: bytes, spender: bytes) -> int

# state-changing (explicit caller)
transfer(caller, to, amount) -> bool
approve(caller, spender, amount) -> bool
transfer_from(caller, owner, to, amount) -> bool
increase_allowance(caller, spender, added) -> bool
decrease_allowance(caller, spender, subtracted) -> bool

Notes
-----
- An allowance of U256_MAX is unlimited: `transfer_from` never decrements it.
- Spending an allowance does not emit Approval.
- Zero-amount transfers succeed and emit a zero-value Transfer.
"""

from __future__ import annotations

from typing import Final

from ledger_vm.stdlib import abi, events, storage

from .. import errors
from ..math import U256_MAX
from ..math.safe_uint import try_sub_u256, u256_add, u256_sub
from . import (
    EVT_APPROVAL,
    EVT_TRANSFER,
    ZERO_ADDRESS,
    is_address_or_null,
    key_allow,
    key_balance,
    require_account,
    require_amount,
    require_decimals,
    require_name,
    require_symbol,
)

# ------------------------------------------------------------------------------
# Storage keys (metadata). Values are raw bytes unless noted.
# ------------------------------------------------------------------------------

K_NAME: Final[bytes] = b"tok:meta:name"
K_SYMBOL: Final[bytes] = b"tok:meta:symbol"
K_DECIMALS: Final[bytes] = b"tok:meta:dec"  # u256 (32B big-endian)
K_TOTAL: Final[bytes] = b"tok:meta:total"  # u256 (32B big-endian)


# ------------------------------------------------------------------------------
# Metadata (pure)
# ------------------------------------------------------------------------------


def name() -> bytes:
    return storage.get(K_NAME)


def symbol() -> bytes:
    return storage.get(K_SYMBOL)


def decimals() -> int:
    return storage.get_int(K_DECIMALS)


def total_supply() -> int:
    return storage.get_int(K_TOTAL)


def set_metadata(name: bytes, symbol: bytes, decimals: int) -> None:
    """Validate and persist name/symbol/decimals. Callers gate re-entry."""
    require_name(name)
    require_symbol(symbol)
    require_decimals(decimals)
    storage.set(K_NAME, bytes(name))
    storage.set(K_SYMBOL, bytes(symbol))
    storage.set_int(K_DECIMALS, decimals)


# ------------------------------------------------------------------------------
# Views
# ------------------------------------------------------------------------------


def balance_of(addr: bytes) -> int:
    if not is_address_or_null(addr):
        return 0
    return storage.get_int(key_balance(addr))


def allowance(owner: bytes, spender: bytes) -> int:
    if not (is_address_or_null(owner) and is_address_or_null(spender)):
        return 0
    return storage.get_int(key_allow(owner, spender))


# ------------------------------------------------------------------------------
# Core primitives
# ------------------------------------------------------------------------------


def update(frm: bytes, to: bytes, amount: int) -> None:
    """
    Move `amount` from `frm` to `to` and emit Transfer.

    `frm == ZERO_ADDRESS` mints (total supply grows), `to == ZERO_ADDRESS`
    burns (total supply shrinks). Endpoint validation is the caller's job.
    """
    require_amount(amount)
    if frm == ZERO_ADDRESS:
        storage.set_int(K_TOTAL, u256_add(total_supply(), amount))
    else:
        from_key = key_balance(frm)
        remaining = try_sub_u256(storage.get_int(from_key), amount)
        if remaining is None:
            abi.revert(errors.INSUFFICIENT_BALANCE)
        storage.set_int(from_key, remaining)

    if to == ZERO_ADDRESS:
        storage.set_int(K_TOTAL, u256_sub(total_supply(), amount))
    else:
        to_key = key_balance(to)
        storage.set_int(to_key, u256_add(storage.get_int(to_key), amount))

    events.emit(EVT_TRANSFER, {"from": frm, "to": to, "value": amount})


def mint(to: bytes, amount: int) -> None:
    require_account(to)
    update(ZERO_ADDRESS, to, amount)


def _set_allowance(owner: bytes, spender: bytes, amount: int) -> None:
    storage.set_int(key_allow(owner, spender), amount)
    events.emit(EVT_APPROVAL, {"owner": owner, "spender": spender, "value": amount})


# ------------------------------------------------------------------------------
# Mutations (explicit caller)
# ------------------------------------------------------------------------------


def transfer(caller: bytes, to: bytes, amount: int) -> bool:
    require_account(caller)
    require_account(to)
    update(caller, to, amount)
    return True


def approve(caller: bytes, spender: bytes, amount: int) -> bool:
    require_account(caller)
    require_account(spender)
    require_amount(amount)
    _set_allowance(caller, spender, amount)
    return True


def transfer_from(caller: bytes, owner: bytes, to: bytes, amount: int) -> bool:
    """
    Spender (`caller`) transfers `amount` from `owner` to `to` using allowance.

    The allowance is checked before the balance, so a spender without enough
    allowance always sees InsufficientAllowance.
    """
    require_account(caller)
    require_account(owner)
    require_account(to)
    require_amount(amount)

    allow_key = key_allow(owner, caller)
    current = storage.get_int(allow_key)
    if current < amount:
        abi.revert(errors.INSUFFICIENT_ALLOWANCE)
    if current != U256_MAX:
        storage.set_int(allow_key, current - amount)

    update(owner, to, amount)
    return True


def increase_allowance(caller: bytes, spender: bytes, added: int) -> bool:
    require_account(caller)
    require_account(spender)
    require_amount(added)
    cur = storage.get_int(key_allow(caller, spender))
    _set_allowance(caller, spender, u256_add(cur, added))
    return True


def decrease_allowance(caller: bytes, spender: bytes, subtracted: int) -> bool:
    require_account(caller)
    require_account(spender)
    require_amount(subtracted)
    remaining = try_sub_u256(storage.get_int(key_allow(caller, spender)), subtracted)
    if remaining is None:
        abi.revert(errors.INSUFFICIENT_ALLOWANCE)
    _set_allowance(caller, spender, remaining)
    return True


__all__ = [
    "K_NAME",
    "K_SYMBOL",
    "K_DECIMALS",
    "K_TOTAL",
    "name",
    "symbol",
    "decimals",
    "total_supply",
    "set_metadata",
    "balance_of",
    "allowance",
    "update",
    "mint",
    "transfer",
    "approve",
    "transfer_from",
    "increase_allowance",
    "decrease_allowance",
]
