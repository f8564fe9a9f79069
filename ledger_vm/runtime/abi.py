"""
ledger_vm.runtime.abi — failure helpers for contracts.

    abi.require(balance >= amount, b"InsufficientBalance")
    abi.revert(b"Unauthorized")

Reasons are short byte tags; callers match on them exactly.
"""

from __future__ import annotations

from typing import NoReturn

from ledger_vm.errors import Revert


def revert(reason: bytes = b"") -> NoReturn:
    raise Revert(reason)


def require(condition: bool, reason: bytes = b"") -> None:
    if not condition:
        raise Revert(reason)


__all__ = ["revert", "require"]
