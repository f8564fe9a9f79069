# -*- coding: utf-8 -*-
"""
Example Contract — Fee Token
----------------------------

A standalone fungible token, deployed directly rather than cloned. The
factory uses a token like this one as its external fee ledger: creators
`approve` the factory and the factory pulls the fee with `transfer_from`.

Views:
  - name() -> bytes
  - symbol() -> bytes
  - decimals() -> int
  - total_supply() -> int
  - balance_of(account: bytes) -> int
  - allowance(owner: bytes, spender: bytes) -> int
  - owner() -> bytes
State-changing:
  - transfer(to: bytes, amount: int) -> bool
  - approve(spender: bytes, amount: int) -> bool
  - transfer_from(owner: bytes, to: bytes, amount: int) -> bool
  - increase_allowance(spender: bytes, added: int) -> bool
  - decrease_allowance(spender: bytes, subtracted: int) -> bool
  - mint(to: bytes, amount: int) -> bool           (owner-only)
  - transfer_ownership(new_owner: bytes) -> None   (owner-only)

The deployer becomes owner and receives the initial supply.
"""
from __future__ import annotations

from contracts.stdlib import access
from contracts.stdlib.token import fungible

__all__ = [
    "name",
    "symbol",
    "decimals",
    "total_supply",
    "balance_of",
    "allowance",
    "owner",
    "transfer",
    "approve",
    "transfer_from",
    "increase_allowance",
    "decrease_allowance",
    "mint",
    "transfer_ownership",
]

DEFAULT_SUPPLY = 1_000_000 * 10**6


def construct(
    caller: bytes,
    name: bytes = b"Fee Token",
    symbol: bytes = b"FEE",
    decimals: int = 6,
    initial_supply: int = DEFAULT_SUPPLY,
) -> None:
    access.init_owner(caller)
    fungible.set_metadata(name, symbol, decimals)
    if initial_supply:
        fungible.mint(caller, initial_supply)


# ----------------------------
# Views
# ----------------------------

def name() -> bytes:
    return fungible.name()

def symbol() -> bytes:
    return fungible.symbol()

def decimals() -> int:
    return fungible.decimals()

def total_supply() -> int:
    return fungible.total_supply()

def balance_of(account: bytes) -> int:
    return fungible.balance_of(account)

def allowance(owner: bytes, spender: bytes) -> int:
    return fungible.allowance(owner, spender)

def owner() -> bytes:
    return access.get_owner() or b""

# ----------------------------
# Mutations
# ----------------------------

def transfer(caller: bytes, to: bytes, amount: int) -> bool:
    return fungible.transfer(caller, to, amount)

def approve(caller: bytes, spender: bytes, amount: int) -> bool:
    return fungible.approve(caller, spender, amount)

def transfer_from(caller: bytes, owner: bytes, to: bytes, amount: int) -> bool:
    return fungible.transfer_from(caller, owner, to, amount)

def increase_allowance(caller: bytes, spender: bytes, added: int) -> bool:
    return fungible.increase_allowance(caller, spender, added)

def decrease_allowance(caller: bytes, spender: bytes, subtracted: int) -> bool:
    return fungible.decrease_allowance(caller, spender, subtracted)

# ----------------------------
# Owner-gated
# ----------------------------

def mint(caller: bytes, to: bytes, amount: int) -> bool:
    access.require_owner(caller)
    fungible.mint(to, amount)
    return True

def transfer_ownership(caller: bytes, new_owner: bytes) -> None:
    access.transfer_ownership(caller, new_owner)
