# -*- coding: utf-8 -*-
"""
contracts.stdlib.errors
=======================

Stable revert tags shared by the token ledger, the clone factory and the
guard primitives, plus their classification into four families:

- **authorization** — the caller is not allowed to perform the operation.
- **validation**    — malformed input; resubmit with corrected arguments.
- **state**         — the contract is in the wrong state (already initialized,
  paused, mid-call); paused clears later, so a retry may succeed.
- **resource**      — balances, allowances, fees or address space fall short;
  change the preconditions before retrying.

Contracts revert with the raw tag (`abi.revert(errors.PAUSED)`); hosts and
tests match on `Revert.reason` and may call `category_of(reason)`.
"""

from __future__ import annotations

from typing import Dict, Final, Optional

from ledger_vm.errors import CLONE_FAILED as _HOST_CLONE_FAILED

# ---- authorization -----------------------------------------------------------

UNAUTHORIZED: Final[bytes] = b"Unauthorized"

# ---- validation --------------------------------------------------------------

INVALID_PARAMETER: Final[bytes] = b"InvalidParameter"
INVALID_ACCOUNT: Final[bytes] = b"InvalidAccount"

# ---- state -------------------------------------------------------------------

ALREADY_INITIALIZED: Final[bytes] = b"AlreadyInitialized"
NOT_INITIALIZED: Final[bytes] = b"NotInitialized"
PAUSED: Final[bytes] = b"Paused"
REENTRANT_CALL: Final[bytes] = b"ReentrantCall"

# ---- resource ----------------------------------------------------------------

INSUFFICIENT_BALANCE: Final[bytes] = b"InsufficientBalance"
INSUFFICIENT_ALLOWANCE: Final[bytes] = b"InsufficientAllowance"
INSUFFICIENT_FEE: Final[bytes] = b"InsufficientFee"
FEE_TRANSFER_FAILED: Final[bytes] = b"FeeTransferFailed"
TRANSFER_FAILED: Final[bytes] = b"TransferFailed"
TOO_MANY_DEPLOYMENTS: Final[bytes] = b"TooManyDeployments"
INDEX_OUT_OF_BOUNDS: Final[bytes] = b"IndexOutOfBounds"
CLONE_FAILED: Final[bytes] = _HOST_CLONE_FAILED

# ---- classification ----------------------------------------------------------

AUTHORIZATION: Final[str] = "authorization"
VALIDATION: Final[str] = "validation"
STATE: Final[str] = "state"
RESOURCE: Final[str] = "resource"

CATEGORIES: Dict[bytes, str] = {
    UNAUTHORIZED: AUTHORIZATION,
    INVALID_PARAMETER: VALIDATION,
    INVALID_ACCOUNT: VALIDATION,
    ALREADY_INITIALIZED: STATE,
    NOT_INITIALIZED: STATE,
    PAUSED: STATE,
    REENTRANT_CALL: STATE,
    INSUFFICIENT_BALANCE: RESOURCE,
    INSUFFICIENT_ALLOWANCE: RESOURCE,
    INSUFFICIENT_FEE: RESOURCE,
    FEE_TRANSFER_FAILED: RESOURCE,
    TRANSFER_FAILED: RESOURCE,
    TOO_MANY_DEPLOYMENTS: RESOURCE,
    INDEX_OUT_OF_BOUNDS: RESOURCE,
    CLONE_FAILED: RESOURCE,
    b"UINT:OVERFLOW": RESOURCE,
    b"UINT:UNDERFLOW": RESOURCE,
}


def category_of(reason: bytes) -> Optional[str]:
    """Family of a revert tag, or None for tags this package does not define."""
    return CATEGORIES.get(bytes(reason))


def is_retryable_later(reason: bytes) -> bool:
    """True for failures expected to clear without caller action (paused)."""
    return bytes(reason) == PAUSED


__all__ = [
    "UNAUTHORIZED",
    "INVALID_PARAMETER",
    "INVALID_ACCOUNT",
    "ALREADY_INITIALIZED",
    "NOT_INITIALIZED",
    "PAUSED",
    "REENTRANT_CALL",
    "INSUFFICIENT_BALANCE",
    "INSUFFICIENT_ALLOWANCE",
    "INSUFFICIENT_FEE",
    "FEE_TRANSFER_FAILED",
    "TRANSFER_FAILED",
    "TOO_MANY_DEPLOYMENTS",
    "INDEX_OUT_OF_BOUNDS",
    "CLONE_FAILED",
    "AUTHORIZATION",
    "VALIDATION",
    "STATE",
    "RESOURCE",
    "CATEGORIES",
    "category_of",
    "is_retryable_later",
]
