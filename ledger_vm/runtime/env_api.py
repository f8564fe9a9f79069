"""
ledger_vm.runtime.env_api — deterministic call/block metadata for contracts.
"""

from __future__ import annotations

from .context import active_engine


def self_address() -> bytes:
    return active_engine().current_frame().address


def value() -> int:
    """Native value attached to the current call."""
    return active_engine().current_frame().value


def timestamp() -> int:
    return active_engine().block.timestamp


def block_height() -> int:
    return active_engine().block.height


def chain_id() -> int:
    return active_engine().block.chain_id


__all__ = ["self_address", "value", "timestamp", "block_height", "chain_id"]
