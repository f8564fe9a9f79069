"""
ledger_vm.types.status — canonical call status enum.

TxStatus models the *logical* outcome of a top-level call:
  - SUCCESS : Execution completed without a failure
  - REVERT  : Contract-triggered revert (explicit failure tag)
  - FAULT   : Host-detected failure (depth, static write, bad target, limits)

String forms:
  - str(TxStatus.SUCCESS) -> "success"   (good for logs)
  - TxStatus.SUCCESS.code  -> "SUCCESS"  (good for receipts)
"""

from __future__ import annotations

from enum import Enum
from typing import Optional


class TxStatus(str, Enum):
    SUCCESS = "success"
    REVERT = "revert"
    FAULT = "fault"

    @property
    def code(self) -> str:
        """Uppercase code form, e.g., 'SUCCESS' / 'REVERT' / 'FAULT'."""
        return self.value.upper()

    @property
    def is_success(self) -> bool:
        return self is TxStatus.SUCCESS

    @property
    def as_int(self) -> int:
        """Compact numeric form used in the CBOR receipt encoding."""
        return _TO_INT[self]

    @classmethod
    def from_int(cls, n: int) -> "TxStatus":
        for status, code in _TO_INT.items():
            if code == n:
                return status
        raise ValueError(f"unknown TxStatus code: {n!r}")

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_str(cls, s: str, *, default: Optional["TxStatus"] = None) -> "TxStatus":
        """
        Parse a status from a string (case-insensitive). Accepts the enum
        values plus "ok" for SUCCESS.
        """
        norm = (s or "").strip().lower()
        if norm == "ok":
            return cls.SUCCESS
        try:
            return cls(norm)
        except ValueError:
            if default is not None:
                return default
            raise ValueError(f"unknown TxStatus: {s!r}") from None


_TO_INT = {TxStatus.SUCCESS: 0, TxStatus.REVERT: 1, TxStatus.FAULT: 2}

__all__ = ["TxStatus"]
