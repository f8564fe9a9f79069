"""
ledger_vm.types.result — CallResult container for a top-level call.

`CallResult` is what `Engine.execute` returns and what `Engine.receipts`
collects. It is frozen for determinism.

Fields
------
* sender       : bytes   — authenticated caller of the top-level call
* to           : bytes   — target contract (the new address for deployments)
* fn           : str     — entry point name ("construct" for deployments)
* status       : TxStatus
* return_value : Any     — whatever the entry point returned (None on failure)
* logs         : tuple[LogEvent, ...] — committed events, empty on failure
* error        : dict | None — `VmError.to_dict()` of the failure
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from .events import LogEvent
from .status import TxStatus


@dataclass(frozen=True)
class CallResult:
    sender: bytes
    to: bytes
    fn: str
    status: TxStatus
    return_value: Any = None
    logs: Tuple[LogEvent, ...] = ()
    error: Optional[Dict[str, Any]] = None

    @property
    def is_success(self) -> bool:
        return self.status.is_success

    @property
    def reason(self) -> Optional[bytes]:
        """Revert tag as bytes, if the call reverted."""
        if self.error is None:
            return None
        data = self.error.get("data") or {}
        r = data.get("reason")
        return r.encode("utf-8") if isinstance(r, str) else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sender": "0x" + self.sender.hex(),
            "to": "0x" + self.to.hex(),
            "fn": self.fn,
            "status": self.status.code,
            "logs": [ev.to_dict() for ev in self.logs],
            "error": self.error,
        }


__all__ = ["CallResult"]
