# -*- coding: utf-8 -*-
"""
contracts.stdlib.math.safe_uint
===============================

Checked U256 arithmetic: revert on overflow/underflow instead of wrapping.

    u256_add(x, y)  -> x + y, reverts b"UINT:OVERFLOW" past U256_MAX
    u256_sub(x, y)  -> x - y, reverts b"UINT:UNDERFLOW" below zero
    try_sub_u256    -> x - y or None
"""

from __future__ import annotations

from typing import Final, Optional

from ledger_vm.stdlib import abi

from . import U256_MAX, require_u256

ERR_OVER: Final[bytes] = b"UINT:OVERFLOW"
ERR_UNDER: Final[bytes] = b"UINT:UNDERFLOW"


def u256_add(x: int, y: int) -> int:
    require_u256(x, y)
    z = x + y
    if z > U256_MAX:
        abi.revert(ERR_OVER)
    return z


def u256_sub(x: int, y: int) -> int:
    require_u256(x, y)
    if y > x:
        abi.revert(ERR_UNDER)
    return x - y


def try_sub_u256(x: int, y: int) -> Optional[int]:
    require_u256(x, y)
    return None if y > x else x - y


__all__ = ["ERR_OVER", "ERR_UNDER", "u256_add", "u256_sub", "try_sub_u256"]
