"""
ledger_vm.errors — typed failures raised by the contract VM.

The engine communicates failures via *typed exceptions* that are converted
into receipts and structured error payloads by `Engine.execute`. Every class
here is pure-Python and dependency-free so the low-level runtime modules can
import it without cycles.

Hierarchy
---------
VmError (base)
 ├─ Revert              : contract-triggered failure carrying a byte tag
 ├─ CallDepthExceeded   : nested call chain is deeper than the configured cap
 ├─ StaticCallViolation : a write was attempted from a read-only frame
 ├─ UnknownFunction     : the target has no code or no such public entry point
 ├─ ResourceLimit       : storage/event size caps were exceeded
 ├─ InsufficientFunds   : a native value transfer exceeds the payer balance
 └─ ContractFault       : contract code raised an unexpected Python exception

Notes
-----
* `Revert` is a *semantic* failure: the contract rejected the call. The tag
  (e.g. b"InsufficientBalance") is the stable, machine-readable reason.
* All other classes signal a rules violation detected by the host. Callers
  using `calls.try_call` observe both kinds uniformly as a failed call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

# Host-raised revert tag for address-allocation failures during create/clone.
CLONE_FAILED = b"CloneFailed"


@dataclass
class VmError(Exception):
    """
    Base VM error.

    Attributes:
        message: Human-readable explanation.
        code:    Stable machine code string (e.g., 'REVERT', 'CALL_DEPTH').
        data:    Optional structured details (kept JSON-serializable).
    """
    message: str = "vm error"
    code: str = "VM_ERROR"
    data: Optional[Dict[str, Any]] = field(default=None)

    def __str__(self) -> str:
        if self.data:
            return f"{self.code}: {self.message} ({self.data})"
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to a JSON-safe dict for receipts/logs."""
        out: Dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            out["data"] = self.data
        return out


class Revert(VmError):
    """
    Contract-triggered revert.

    `reason` is the raw byte tag passed to `abi.revert`; it is also exposed as
    text under `data["reason"]` for JSON consumers.

    Usage:
        raise Revert(b"InsufficientBalance")
    """
    def __init__(
        self,
        reason: bytes = b"",
        *,
        message: str = "reverted",
        data: Optional[Dict[str, Any]] = None,
    ):
        if not isinstance(reason, (bytes, bytearray)):
            raise TypeError("revert reason must be bytes")
        d: Dict[str, Any] = dict(data or {})
        d.setdefault("reason", bytes(reason).decode("utf-8", "replace"))
        super().__init__(message=message, code="REVERT", data=d)
        self.reason = bytes(reason)


class CallDepthExceeded(VmError):
    def __init__(self, depth: int, limit: int):
        super().__init__(
            message="call depth exceeded",
            code="CALL_DEPTH",
            data={"depth": depth, "limit": limit},
        )


class StaticCallViolation(VmError):
    """A state write (storage, event, value transfer) from a read-only frame."""

    def __init__(self, op: str):
        super().__init__(
            message="state write in read-only call",
            code="STATIC_WRITE",
            data={"op": op},
        )


class UnknownFunction(VmError):
    def __init__(self, message: str, *, address: bytes, fn: Optional[str] = None):
        d: Dict[str, Any] = {"address": "0x" + address.hex()}
        if fn is not None:
            d["fn"] = fn
        super().__init__(message=message, code="UNKNOWN_FUNCTION", data=d)


class ResourceLimit(VmError):
    def __init__(self, message: str, *, limit: str, size: int, cap: int):
        super().__init__(
            message=message,
            code="RESOURCE_LIMIT",
            data={"limit": limit, "size": size, "cap": cap},
        )


class InsufficientFunds(VmError):
    def __init__(self, *, address: bytes, balance: int, amount: int):
        super().__init__(
            message="insufficient native balance",
            code="INSUFFICIENT_FUNDS",
            data={"address": "0x" + address.hex(), "balance": balance, "amount": amount},
        )


class ContractFault(VmError):
    """Wraps an unexpected exception raised from inside contract code."""

    def __init__(self, exc: BaseException, *, address: bytes, fn: str):
        super().__init__(
            message=f"{type(exc).__name__}: {exc}",
            code="CONTRACT_FAULT",
            data={"address": "0x" + address.hex(), "fn": fn},
        )


def failure_reason(err: VmError) -> bytes:
    """
    Reason bytes reported to `try_call` callers: the revert tag for reverts,
    the error code for host-detected failures.
    """
    if isinstance(err, Revert):
        return err.reason
    return err.code.encode("ascii")


__all__ = [
    "CLONE_FAILED",
    "VmError",
    "Revert",
    "CallDepthExceeded",
    "StaticCallViolation",
    "UnknownFunction",
    "ResourceLimit",
    "InsufficientFunds",
    "ContractFault",
    "failure_reason",
]
