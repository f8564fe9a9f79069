# -*- coding: utf-8 -*-
"""
contracts.stdlib.registry
=========================

Append-only, contract-local registry of deployed addresses.

Every recorded address keeps its global insertion index forever, is indexed
under its creator, and is flagged as known. Nothing is ever removed, so
indices handed out by `at` and `slice` stay valid.

Design goals
------------
- **Deterministic & simple**: pure storage operations, no events (the owning
  contract emits its own).
- **Stable ordering**: insertion order, globally and per creator.
- **Bounded per creator**: at most MAX_PER_CREATOR entries per creator.
- **Library-only permissions**: the owning contract decides who may record.

Storage layout
--------------
    "reg:count"                      -> u256 total entries
    "reg:all:"   + u64be(i)          -> address at global index i
    "reg:byn:"   + creator           -> u256 entries for creator
    "reg:by:"    + creator + u64be(j) -> creator's j-th address
    "reg:known:" + addr              -> b"1" once recorded

Reverts
-------
- b"TooManyDeployments"  creator already holds MAX_PER_CREATOR entries
- b"IndexOutOfBounds"    `at` past the end
- b"InvalidParameter"    negative / non-int pagination arguments
"""

from __future__ import annotations

from typing import Final, List, Tuple

from ledger_vm.runtime.context import ADDRESS_LEN
from ledger_vm.stdlib import abi, storage

from .. import errors

MAX_PER_CREATOR: Final[int] = 100

_K_COUNT: Final[bytes] = b"reg:count"
_P_ALL: Final[bytes] = b"reg:all:"
_P_BY_N: Final[bytes] = b"reg:byn:"
_P_BY: Final[bytes] = b"reg:by:"
_P_KNOWN: Final[bytes] = b"reg:known:"


def _idx(i: int) -> bytes:
    return i.to_bytes(8, "big")


def _is_addr(x: object) -> bool:
    return isinstance(x, bytes) and len(x) == ADDRESS_LEN


def _is_index(x: object) -> bool:
    return isinstance(x, int) and not isinstance(x, bool) and x >= 0


# ---- writes ------------------------------------------------------------------


def require_capacity(creator: bytes) -> None:
    if creator_count(creator) >= MAX_PER_CREATOR:
        abi.revert(errors.TOO_MANY_DEPLOYMENTS)


def record(addr: bytes, creator: bytes) -> int:
    """Append `addr` for `creator`; returns its global index."""
    require_capacity(creator)
    i = total()
    storage.set(_P_ALL + _idx(i), addr)
    storage.set_int(_K_COUNT, i + 1)

    j = creator_count(creator)
    storage.set(_P_BY + creator + _idx(j), addr)
    storage.set_int(_P_BY_N + creator, j + 1)

    storage.set(_P_KNOWN + addr, b"1")
    return i


# ---- reads -------------------------------------------------------------------


def total() -> int:
    return storage.get_int(_K_COUNT)


def at(index: int) -> bytes:
    if not _is_index(index) or index >= total():
        abi.revert(errors.INDEX_OUT_OF_BOUNDS)
    return storage.get(_P_ALL + _idx(index))


def slice(offset: int, limit: int) -> Tuple[List[bytes], int]:  # noqa: A001
    """
    Entries [offset, offset + limit) clipped to the end, plus the total.

    An offset at or past the end yields an empty list rather than an error.
    """
    if not _is_index(offset) or not _is_index(limit):
        abi.revert(errors.INVALID_PARAMETER)
    n = total()
    end = min(n, offset + limit)
    return [storage.get(_P_ALL + _idx(i)) for i in range(offset, end)], n


def creator_count(creator: bytes) -> int:
    if not _is_addr(creator):
        return 0
    return storage.get_int(_P_BY_N + creator)


def by_creator(creator: bytes) -> List[bytes]:
    return [storage.get(_P_BY + creator + _idx(j)) for j in range(creator_count(creator))]


def is_known(addr: bytes) -> bool:
    return _is_addr(addr) and storage.exists(_P_KNOWN + addr)


__all__ = [
    "MAX_PER_CREATOR",
    "require_capacity",
    "record",
    "total",
    "at",
    "slice",
    "creator_count",
    "by_creator",
    "is_known",
]
