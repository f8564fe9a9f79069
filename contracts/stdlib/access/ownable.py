# -*- coding: utf-8 -*-
"""
contracts.stdlib.access.ownable
================================

Minimal, deterministic **Ownable** helper for Python contracts.

- read the current owner (`get_owner`)
- initialize the owner once (`init_owner`)
- check that a caller is the owner (`require_owner`)
- transfer ownership to a new account (`transfer_ownership`)

There is no renounce: an owned contract always has an owner.

Events:
    - "OwnershipTransferred" args: {"previous": bytes, "new": bytes}
"""
from __future__ import annotations

from typing import Optional

from ledger_vm.runtime.context import ADDRESS_LEN, ZERO_ADDRESS

from .. import errors
from . import OWNER_KEY

__all__ = [
    "OWNER_KEY",
    "get_owner",
    "init_owner",
    "require_owner",
    "transfer_ownership",
]

# --- Internal stdlib accessors ------------------------------------------------


def _std_storage():
    from ledger_vm.stdlib import storage

    return storage


def _std_events():
    from ledger_vm.stdlib import events

    return events


def _std_abi():
    from ledger_vm.stdlib import abi

    return abi


def _valid_owner(addr: object) -> bool:
    return isinstance(addr, bytes) and len(addr) == ADDRESS_LEN and addr != ZERO_ADDRESS


# --- Owner primitives ---------------------------------------------------------


def get_owner() -> Optional[bytes]:
    """
    Return the current owner address, or None if not set.
    """
    v = _std_storage().get(OWNER_KEY)
    return v if v else None


def init_owner(owner: bytes) -> None:
    """
    Initialize the contract owner. Does not overwrite an owner already set.
    """
    if not _valid_owner(owner):
        _std_abi().revert(errors.INVALID_ACCOUNT)
    s = _std_storage()
    if not s.exists(OWNER_KEY):
        s.set(OWNER_KEY, owner)
        _std_events().emit(b"OwnershipTransferred", {"previous": ZERO_ADDRESS, "new": owner})


def require_owner(caller: bytes) -> None:
    """
    Revert `Unauthorized` unless `caller` equals the current owner.
    """
    owner = get_owner()
    if owner is None or owner != caller:
        _std_abi().revert(errors.UNAUTHORIZED)


def transfer_ownership(caller: bytes, new_owner: bytes) -> None:
    """
    Owner-only: transfer ownership to `new_owner` (must be a non-null account).
    """
    require_owner(caller)
    if not _valid_owner(new_owner):
        _std_abi().revert(errors.INVALID_ACCOUNT)
    _std_storage().set(OWNER_KEY, new_owner)
    _std_events().emit(b"OwnershipTransferred", {"previous": caller, "new": new_owner})
