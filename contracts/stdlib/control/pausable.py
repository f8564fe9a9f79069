# -*- coding: utf-8 -*-
"""
contracts.stdlib.control.pausable
=================================

Global pause switch with a single designated pauser account.

Key Points
----------
- The paused flag is **global to the contract** (single boolean).
- Changing pause state requires the caller to be the stored **pauser**.
  A contract whose pauser is the null account can never be paused.
- Emitted Events (on change only):
  * ``Paused``   : {"account": bytes}
  * ``Unpaused`` : {"account": bytes}
  * ``PauserTransferred`` : {"previous": bytes, "new": bytes}

Public API
----------
- ``init_pauser(pauser: bytes) -> None``: set the pauser (init paths only)
- ``get_pauser() -> bytes``: current pauser, ZERO_ADDRESS when none
- ``is_paused() -> bool``: read current flag
- ``require_not_paused() -> None``: revert ``Paused`` if paused
- ``require_pauser(caller) -> None``: revert ``Unauthorized`` otherwise
- ``pause(caller) -> None`` / ``unpause(caller) -> None``
- ``transfer_pauser(caller, new_pauser) -> None``

Usage
-----
    from contracts.stdlib.control import pausable

    def transfer(caller: bytes, to: bytes, amount: int) -> bool:
        pausable.require_not_paused()
        ...
"""
from __future__ import annotations

from typing import Final

from ledger_vm.runtime.context import ADDRESS_LEN, ZERO_ADDRESS

from .. import errors

__all__ = [
    "K_PAUSED",
    "K_PAUSER",
    "init_pauser",
    "get_pauser",
    "is_paused",
    "require_not_paused",
    "require_pauser",
    "pause",
    "unpause",
    "transfer_pauser",
]

# ---- Constants ---------------------------------------------------------------

K_PAUSED: Final[bytes] = b"control:paused"
K_PAUSER: Final[bytes] = b"control:pauser"


# ---- Local stdlib accessors --------------------------------------------------


def _storage():
    from ledger_vm.stdlib import storage

    return storage


def _events():
    from ledger_vm.stdlib import events

    return events


def _abi():
    from ledger_vm.stdlib import abi

    return abi


# ---- Pauser -----------------------------------------------------------------


def init_pauser(pauser: bytes) -> None:
    """
    Store `pauser`. The null account is accepted and means "unpausable".
    """
    if not isinstance(pauser, bytes) or len(pauser) != ADDRESS_LEN:
        _abi().revert(errors.INVALID_PARAMETER)
    _storage().set(K_PAUSER, b"" if pauser == ZERO_ADDRESS else pauser)


def get_pauser() -> bytes:
    return _storage().get(K_PAUSER) or ZERO_ADDRESS


def require_pauser(caller: bytes) -> None:
    p = _storage().get(K_PAUSER)
    if not p or p != caller:
        _abi().revert(errors.UNAUTHORIZED)


def transfer_pauser(caller: bytes, new_pauser: bytes) -> None:
    """
    Pauser-only: hand the switch to `new_pauser` (must be a non-null account).
    """
    require_pauser(caller)
    if not isinstance(new_pauser, bytes) or len(new_pauser) != ADDRESS_LEN or new_pauser == ZERO_ADDRESS:
        _abi().revert(errors.INVALID_ACCOUNT)
    _storage().set(K_PAUSER, new_pauser)
    _events().emit(b"PauserTransferred", {"previous": caller, "new": new_pauser})


# ---- Flag -------------------------------------------------------------------


def is_paused() -> bool:
    return _storage().exists(K_PAUSED)


def require_not_paused() -> None:
    if is_paused():
        _abi().revert(errors.PAUSED)


def pause(caller: bytes) -> None:
    """
    Set the global pause flag. No-op (and no event) if already paused.
    """
    require_pauser(caller)
    if is_paused():
        return
    _storage().set(K_PAUSED, b"1")
    _events().emit(b"Paused", {"account": caller})


def unpause(caller: bytes) -> None:
    """
    Clear the global pause flag. No-op (and no event) if not paused.
    """
    require_pauser(caller)
    if not is_paused():
        return
    _storage().set(K_PAUSED, b"")
    _events().emit(b"Unpaused", {"account": caller})
