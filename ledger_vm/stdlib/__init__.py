"""
ledger_vm.stdlib
================

Contract-facing standard library surface.

Contracts do:

    from ledger_vm.stdlib import abi, calls, code, env, events, storage, treasury

Exports
-------
- storage  : get/set/delete/exists/get_int/set_int over the current contract's storage
- events   : emit(name: bytes, args: dict)
- abi      : revert(reason), require(cond, reason)
- treasury : balance(), balance_of(addr), transfer(to, amount)
- calls    : call/try_call/view/try_view/create/clone
- code     : set_immutable/get_immutable/code_hash/is_contract
- env      : self_address/value/timestamp/block_height/chain_id

Each name is the corresponding `ledger_vm.runtime.*_api` module.
"""

from __future__ import annotations

from ledger_vm.runtime import abi
from ledger_vm.runtime import calls_api as calls
from ledger_vm.runtime import code_api as code
from ledger_vm.runtime import env_api as env
from ledger_vm.runtime import events_api as events
from ledger_vm.runtime import storage_api as storage
from ledger_vm.runtime import treasury_api as treasury

__all__ = ("abi", "calls", "code", "env", "events", "storage", "treasury")
