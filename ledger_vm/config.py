"""
ledger_vm.config — numeric caps and block-environment defaults for the VM.

This module centralizes configuration for the deterministic contract VM. It
has NO third-party deps and is safe to import very early.

Configuration precedence:
  1) Environment variables (LEDGER_VM_*)
  2) Hardcoded safe defaults below

Key env vars (case-insensitive where boolean):
  - LEDGER_VM_STRICT                  (bool)   default: true
  - LEDGER_VM_MAX_CALL_DEPTH          (int)    default: 64
  - LEDGER_VM_MAX_STORAGE_KEY_BYTES   (int)    default: 64
  - LEDGER_VM_MAX_STORAGE_VAL_BYTES   (int)    default: 4096
  - LEDGER_VM_MAX_LOGS_PER_CALL       (int)    default: 1024
  - LEDGER_VM_MAX_EVENT_BYTES         (int)    default: 16384
  - LEDGER_VM_CHAIN_ID                (int)    default: 1
  - LEDGER_VM_GENESIS_TIMESTAMP       (int)    default: 1_700_000_000
  - LEDGER_VM_BLOCK_TIME              (int)    default: 12

In strict mode an unexpected Python exception raised by contract code is
reported as a CONTRACT_FAULT; with strict mode off it propagates unchanged,
which is handy when debugging a contract under pytest.

Usage:
    from ledger_vm.config import load_config
    CFG = load_config()
    if CFG.max_call_depth < 8: ...
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Any, Dict


# ----------------------------- helpers ---------------------------------------


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    val = raw.strip().lower()
    return val in ("1", "true", "t", "yes", "y", "on")


def _env_int(name: str, default: int, *, min_v: int, max_v: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        v = int(raw, 0)
    except ValueError:
        return default
    if v < min_v:
        return min_v
    if v > max_v:
        return max_v
    return v


# ------------------------------- config --------------------------------------


@dataclass(frozen=True)
class VMConfig:
    strict_mode: bool

    # Numeric caps / limits (enforced by the runtime APIs)
    max_call_depth: int
    max_storage_key_bytes: int
    max_storage_value_bytes: int
    max_logs_per_call: int
    max_event_bytes: int

    # Block environment defaults for a fresh Engine
    chain_id: int
    genesis_timestamp: int
    block_time: int

    def as_dict(self) -> Dict[str, Any]:
        return {
            "strict_mode": self.strict_mode,
            "max_call_depth": self.max_call_depth,
            "max_storage_key_bytes": self.max_storage_key_bytes,
            "max_storage_value_bytes": self.max_storage_value_bytes,
            "max_logs_per_call": self.max_logs_per_call,
            "max_event_bytes": self.max_event_bytes,
            "chain_id": self.chain_id,
            "genesis_timestamp": self.genesis_timestamp,
            "block_time": self.block_time,
        }

    def with_overrides(self, **changes: Any) -> "VMConfig":
        """Return a copy with selected fields replaced (tests, embedding hosts)."""
        return replace(self, **changes)


@lru_cache(maxsize=1)
def load_config() -> VMConfig:
    """
    Build and cache a VMConfig from environment + safe defaults.
    """
    return VMConfig(
        strict_mode=_env_bool("LEDGER_VM_STRICT", True),
        max_call_depth=_env_int("LEDGER_VM_MAX_CALL_DEPTH", 64, min_v=8, max_v=1024),
        max_storage_key_bytes=_env_int("LEDGER_VM_MAX_STORAGE_KEY_BYTES", 64, min_v=1, max_v=256),
        max_storage_value_bytes=_env_int("LEDGER_VM_MAX_STORAGE_VAL_BYTES", 4096, min_v=32, max_v=1_048_576),
        max_logs_per_call=_env_int("LEDGER_VM_MAX_LOGS_PER_CALL", 1024, min_v=1, max_v=10_000),
        max_event_bytes=_env_int("LEDGER_VM_MAX_EVENT_BYTES", 16_384, min_v=256, max_v=1_048_576),
        chain_id=_env_int("LEDGER_VM_CHAIN_ID", 1, min_v=0, max_v=2**63 - 1),
        genesis_timestamp=_env_int("LEDGER_VM_GENESIS_TIMESTAMP", 1_700_000_000, min_v=0, max_v=2**63 - 1),
        block_time=_env_int("LEDGER_VM_BLOCK_TIME", 12, min_v=1, max_v=3_600),
    )


def reload_config() -> VMConfig:
    """Drop the cached config and re-read the environment."""
    load_config.cache_clear()
    return load_config()


__all__ = ["VMConfig", "load_config", "reload_config"]
