# -*- coding: utf-8 -*-
"""
contracts.stdlib.control
========================

Deterministic, storage-backed control primitives for Python contracts. The
pause switch lives in `contracts.stdlib.control.pausable`.

**Reentrancy Guard**
   - `guard_enter(scope: bytes = b"default") -> None`
   - `guard_exit(scope: bytes = b"default") -> None`
   - `require_not_entered(scope: bytes = b"default") -> None`

   A lightweight non-reentrancy latch keyed by a *scope* tag. Typical pattern:

       control.guard_enter(b"factory")
       try:
           # critical section (may call out to other contracts)
           ...
       finally:
           control.guard_exit(b"factory")

   `guard_enter` sits outside the `try`: a rejected re-entry must not clear
   the latch held by the outer call.

   If a guard is already entered for a scope, the next `guard_enter` reverts
   with `ReentrantCall`. The latch lives in storage, so a reverted call also
   rolls the latch back.

Storage Layout
--------------
- Reentrancy latch:
    key = b"control:reentrancy:" + scope                   → b"1" or empty
"""
from __future__ import annotations

from .. import errors

__all__ = [
    "guard_enter",
    "guard_exit",
    "require_not_entered",
]

# ---- Canonical storage keys / prefixes --------------------------------------

_REENT_PREFIX: bytes = b"control:reentrancy:"


# ---- Lazy stdlib accessors ---------------------------------------------------


def _std_storage():
    from ledger_vm.stdlib import storage

    return storage


def _std_abi():
    from ledger_vm.stdlib import abi

    return abi


# ---- Helpers ----------------------------------------------------------------


def _guard_key(scope: bytes) -> bytes:
    return _REENT_PREFIX + scope


def _entered(key: bytes) -> bool:
    return _std_storage().exists(key)


# ---- Reentrancy Guard -------------------------------------------------------


def require_not_entered(scope: bytes = b"default") -> None:
    """
    Revert if the guard for `scope` is already entered.
    """
    if _entered(_guard_key(scope)):
        _std_abi().revert(errors.REENTRANT_CALL)


def guard_enter(scope: bytes = b"default") -> None:
    """
    Enter a non-reentrant section for `scope`. Reverts if already entered.
    """
    require_not_entered(scope)
    _std_storage().set(_guard_key(scope), b"1")


def guard_exit(scope: bytes = b"default") -> None:
    """
    Exit a non-reentrant section for `scope`. Idempotent.
    """
    _std_storage().delete(_guard_key(scope))
