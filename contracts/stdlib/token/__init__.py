# -*- coding: utf-8 -*-
"""
contracts.stdlib.token
======================

Constants and validation shared by fungible token contracts. This package
does not touch storage itself; `fungible` holds the ledger.

Conventions
-----------
Storage keys (prefixed bytes):
  - balances:   BAL_PREFIX || <addr>
  - allowances: ALLOW_PREFIX || <owner> || b"|" || <spender>

Events (names as bytes):
  - b"Transfer" with payload {"from": bytes, "to": bytes, "value": int}
  - b"Approval" with payload {"owner": bytes, "spender": bytes, "value": int}

Metadata bounds (lengths in bytes):
  - name:     1..32
  - symbol:   1..10
  - decimals: 0..18

Accounts are 20-byte addresses. The null account (all zero bytes) is the
mint source and burn sink; it is never accepted as a transfer endpoint.
"""

from __future__ import annotations

from typing import Final

from ledger_vm.runtime.context import ADDRESS_LEN, ZERO_ADDRESS
from ledger_vm.stdlib import abi

from .. import errors
from ..math import is_u256

BAL_PREFIX: Final[bytes] = b"tok:bal:"
ALLOW_PREFIX: Final[bytes] = b"tok:allow:"

EVT_TRANSFER: Final[bytes] = b"Transfer"
EVT_APPROVAL: Final[bytes] = b"Approval"

MAX_NAME_LEN: Final[int] = 32
MAX_SYMBOL_LEN: Final[int] = 10
MAX_DECIMALS: Final[int] = 18
DEFAULT_DECIMALS: Final[int] = 18


# -----------------------------------------------------------------------------
# Key derivation helpers (no storage I/O here)
# -----------------------------------------------------------------------------


def key_balance(addr: bytes) -> bytes:
    return BAL_PREFIX + addr


def key_allow(owner: bytes, spender: bytes) -> bytes:
    return ALLOW_PREFIX + owner + b"|" + spender


# -----------------------------------------------------------------------------
# Validation helpers
# -----------------------------------------------------------------------------


def is_account(addr: object) -> bool:
    """A well-formed, non-null 20-byte account."""
    return isinstance(addr, bytes) and len(addr) == ADDRESS_LEN and addr != ZERO_ADDRESS


def is_address_or_null(addr: object) -> bool:
    return isinstance(addr, bytes) and len(addr) == ADDRESS_LEN


def require_account(addr: bytes) -> None:
    if not is_account(addr):
        abi.revert(errors.INVALID_ACCOUNT)


def require_amount(n: int) -> None:
    if not is_u256(n):
        abi.revert(errors.INVALID_PARAMETER)


def _bounded_bytes(b: object, max_len: int) -> bool:
    return isinstance(b, bytes) and 1 <= len(b) <= max_len


def require_name(name: bytes) -> None:
    if not _bounded_bytes(name, MAX_NAME_LEN):
        abi.revert(errors.INVALID_PARAMETER)


def require_symbol(sym: bytes) -> None:
    if not _bounded_bytes(sym, MAX_SYMBOL_LEN):
        abi.revert(errors.INVALID_PARAMETER)


def require_decimals(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool) or not 0 <= n <= MAX_DECIMALS:
        abi.revert(errors.INVALID_PARAMETER)


__all__ = [
    "BAL_PREFIX",
    "ALLOW_PREFIX",
    "EVT_TRANSFER",
    "EVT_APPROVAL",
    "MAX_NAME_LEN",
    "MAX_SYMBOL_LEN",
    "MAX_DECIMALS",
    "DEFAULT_DECIMALS",
    "ZERO_ADDRESS",
    "key_balance",
    "key_allow",
    "is_account",
    "is_address_or_null",
    "require_account",
    "require_amount",
    "require_name",
    "require_symbol",
    "require_decimals",
]
