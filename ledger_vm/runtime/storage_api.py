"""
ledger_vm.runtime.storage_api — contract-facing key/value storage.

Every read and write is scoped to the address of the executing frame, so a
contract (or a clone running shared template code) only ever touches its own
storage. Writes from a read-only frame fail with StaticCallViolation.

Public API (re-exported as `ledger_vm.stdlib.storage`)
------------------------------------------------------
- get(key: bytes) -> bytes                 # b"" when absent
- set(key: bytes, value: bytes) -> None    # empty value deletes
- delete(key: bytes) -> None
- exists(key: bytes) -> bool
- get_int(key: bytes) -> int               # big-endian unsigned, 0 when absent
- set_int(key: bytes, value: int) -> None  # 32-byte big-endian, 0 deletes
"""

from __future__ import annotations

from ledger_vm.errors import ResourceLimit, StaticCallViolation

from .context import active_engine

INT_WIDTH = 32
_U256_MAX = (1 << 256) - 1


def _check_key(key: bytes) -> bytes:
    if not isinstance(key, (bytes, bytearray)):
        raise TypeError(f"storage key must be bytes, got {type(key).__name__}")
    cap = active_engine().config.max_storage_key_bytes
    if len(key) == 0 or len(key) > cap:
        raise ResourceLimit("storage key length out of range", limit="storage_key", size=len(key), cap=cap)
    return bytes(key)


def get(key: bytes) -> bytes:
    eng = active_engine()
    return eng.journal.storage_get(eng.current_frame().address, _check_key(key))


def set(key: bytes, value: bytes) -> None:  # noqa: A001 - contract-facing name
    eng = active_engine()
    frame = eng.current_frame()
    if frame.read_only:
        raise StaticCallViolation("storage.set")
    k = _check_key(key)
    if not isinstance(value, (bytes, bytearray)):
        raise TypeError(f"storage value must be bytes, got {type(value).__name__}")
    cap = eng.config.max_storage_value_bytes
    if len(value) > cap:
        raise ResourceLimit("storage value too large", limit="storage_value", size=len(value), cap=cap)
    eng.journal.storage_set(frame.address, k, bytes(value))


def delete(key: bytes) -> None:
    set(key, b"")


def exists(key: bytes) -> bool:
    return len(get(key)) > 0


def get_int(key: bytes) -> int:
    raw = get(key)
    return int.from_bytes(raw, "big") if raw else 0


def set_int(key: bytes, value: int) -> None:
    if not isinstance(value, int) or isinstance(value, bool):
        raise TypeError("storage int must be int")
    if value < 0 or value > _U256_MAX:
        raise ValueError("storage int out of u256 range")
    set(key, value.to_bytes(INT_WIDTH, "big") if value else b"")


__all__ = ["get", "set", "delete", "exists", "get_int", "set_int", "INT_WIDTH"]
