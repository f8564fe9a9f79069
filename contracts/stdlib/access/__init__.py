# -*- coding: utf-8 -*-
"""
contracts.stdlib.access
=======================

Deterministic, VM-safe access-control helpers for Python contracts.

Only the owner model lives here (`contracts.stdlib.access.ownable`); the
pause switch is in `contracts.stdlib.control.pausable`.

Storage layout (by convention)
------------------------------
- Owner:
    key `b"access:owner"` → `bytes` (address) or empty before initialization.

Events (convention)
-------------------
- "OwnershipTransferred" args: {"previous": bytes, "new": bytes}
"""
from __future__ import annotations

from typing import Final

OWNER_KEY: Final[bytes] = b"access:owner"

from .ownable import get_owner, init_owner, require_owner, transfer_ownership  # noqa: E402

__all__ = ["OWNER_KEY", "get_owner", "init_owner", "require_owner", "transfer_ownership"]
