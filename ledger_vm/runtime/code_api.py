"""
ledger_vm.runtime.code_api — immutables and code introspection.

Immutables are values fixed by a contract's constructor and stored with its
code rather than in storage. Clones share their template's code, so they
also see the template's immutables.

- set_immutable(key: bytes, value: bytes)   # constructor only
- get_immutable(key: bytes) -> bytes        # b"" when unset
- code_hash(addr: bytes) -> bytes           # b"" for plain accounts
- is_contract(addr: bytes) -> bool
"""

from __future__ import annotations

from ledger_vm.errors import VmError

from .context import active_engine, to_address


def set_immutable(key: bytes, value: bytes) -> None:
    frame = active_engine().current_frame()
    if not frame.constructing or frame.code.sealed:
        raise VmError(message="immutables can only be set by the constructor", code="IMMUTABLE_SEALED")
    if not isinstance(key, (bytes, bytearray)) or not isinstance(value, (bytes, bytearray)):
        raise TypeError("immutable key and value must be bytes")
    frame.code.immutables[bytes(key)] = bytes(value)


def get_immutable(key: bytes) -> bytes:
    return active_engine().current_frame().code.immutables.get(bytes(key), b"")


def code_hash(addr: bytes) -> bytes:
    code = active_engine().code_at(to_address(addr))
    return b"" if code is None else code.code_hash


def is_contract(addr: bytes) -> bool:
    return active_engine().code_at(to_address(addr)) is not None


__all__ = ["set_immutable", "get_immutable", "code_hash", "is_contract"]
