"""
ledger_vm.runtime.context — BlockEnv, call frames and address helpers.

BlockEnv carries the deterministic per-block metadata contracts may read
(height, timestamp, chain_id). A Frame describes one executing call: who is
running (`address`), who called it (`caller`), the attached native value and
whether the frame is read-only.

The contract-facing APIs (`storage_api`, `events_api`, ...) never receive an
engine handle explicitly. They resolve the *active* engine through a
ContextVar which the Engine sets for the duration of a top-level call, and
act on its innermost frame.

Design notes
------------
- Addresses are raw 20-byte values. Hex strings (with or without "0x") are
  accepted by `to_address` and normalized to bytes.
- Contract addresses are derived CREATE-style from (deployer, nonce), so
  they are deterministic and never depend on wall-clock or randomness.
"""

from __future__ import annotations

import hashlib
from contextvars import ContextVar
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any, Dict, Optional, Union

if TYPE_CHECKING:  # pragma: no cover
    from .engine import Engine
    from .loader import ContractCode

ADDRESS_LEN = 20
ZERO_ADDRESS = b"\x00" * ADDRESS_LEN

_CREATE_DOMAIN = b"ledger_vm:create"


class ContextError(Exception):
    """Validation or coercion failure for addresses and environments."""


# ----------------------------- helpers ----------------------------- #


def to_address(value: Union[bytes, bytearray, str]) -> bytes:
    """
    Coerce `value` to a 20-byte address.
    - str is read as hex (with or without '0x')
    - bytes-like values are copied
    """
    if isinstance(value, str):
        h = value[2:] if value.startswith(("0x", "0X")) else value
        try:
            value = bytes.fromhex(h)
        except ValueError as e:
            raise ContextError(f"invalid hex address: {value!r}") from e
    if not isinstance(value, (bytes, bytearray)):
        raise ContextError(f"address must be bytes, got {type(value).__name__}")
    b = bytes(value)
    if len(b) != ADDRESS_LEN:
        raise ContextError(f"address must be exactly {ADDRESS_LEN} bytes, got {len(b)}")
    return b


def is_address(value: Any) -> bool:
    return isinstance(value, bytes) and len(value) == ADDRESS_LEN


def to_hex(b: Union[bytes, bytearray]) -> str:
    """Encode bytes as 0x-prefixed lowercase hex."""
    return "0x" + bytes(b).hex()


def derive_address(deployer: bytes, nonce: int) -> bytes:
    """Address of the contract `deployer` creates with allocation `nonce`."""
    digest = hashlib.sha3_256(
        _CREATE_DOMAIN + b"\x00" + deployer + nonce.to_bytes(8, "big")
    ).digest()
    return digest[-ADDRESS_LEN:]


def _require_non_negative_int(name: str, v: Any) -> int:
    if not isinstance(v, int) or isinstance(v, bool):
        raise ContextError(f"{name} must be int, got {type(v).__name__}")
    if v < 0:
        raise ContextError(f"{name} must be non-negative, got {v}")
    return v


# ----------------------------- models ------------------------------ #


@dataclass(frozen=True)
class BlockEnv:
    """
    Deterministic per-block environment passed to contracts.

    Fields
    ------
    height:     Block height (0-based).
    timestamp:  Block timestamp, seconds since epoch.
    chain_id:   Integer chain identifier.
    """
    height: int
    timestamp: int
    chain_id: int

    def __post_init__(self) -> None:
        _require_non_negative_int("height", self.height)
        _require_non_negative_int("timestamp", self.timestamp)
        _require_non_negative_int("chain_id", self.chain_id)

    def next(self, *, seconds: int, blocks: int) -> "BlockEnv":
        return BlockEnv(
            height=self.height + blocks,
            timestamp=self.timestamp + seconds,
            chain_id=self.chain_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class Frame:
    """One executing call on the engine's frame stack."""

    address: bytes
    caller: bytes
    code: "ContractCode"
    fn: str
    value: int = 0
    read_only: bool = False
    depth: int = 0
    constructing: bool = False
    logs_emitted: int = 0


# ----------------------------- active engine ------------------------------ #

_ACTIVE: ContextVar[Optional["Engine"]] = ContextVar("ledger_vm_active_engine", default=None)


def active_engine() -> "Engine":
    eng = _ACTIVE.get()
    if eng is None:
        raise ContextError("no contract call is executing")
    return eng


def current_frame() -> Frame:
    return active_engine().current_frame()


__all__ = [
    "ADDRESS_LEN",
    "ZERO_ADDRESS",
    "ContextError",
    "BlockEnv",
    "Frame",
    "to_address",
    "is_address",
    "to_hex",
    "derive_address",
    "active_engine",
    "current_frame",
]
