# -*- coding: utf-8 -*-
"""
contracts.stdlib.math
=====================

Integer-only numeric envelopes for contracts. Amounts are unsigned 256-bit
values; `safe_uint` builds checked arithmetic on top of these guards.

Conventions
-----------
- All functions are pure and deterministic (aside from calling `abi.revert`).
- No floats anywhere.
"""

from __future__ import annotations

from typing import Final

from ledger_vm.stdlib import abi

U256_MAX: Final[int] = (1 << 256) - 1

ERR_OOB: Final[bytes] = b"UINT:OOB"


def is_u256(x: object) -> bool:
    """True for a Python int (not bool) in [0, U256_MAX]."""
    return isinstance(x, int) and not isinstance(x, bool) and 0 <= x <= U256_MAX


def require_u256(*xs: int) -> None:
    for x in xs:
        if not is_u256(x):
            abi.revert(ERR_OOB)


__all__ = ["U256_MAX", "ERR_OOB", "is_u256", "require_u256"]
