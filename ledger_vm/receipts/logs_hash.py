"""
ledger_vm.receipts.logs_hash — Merkle commitment over emitted events.

* Hash function: SHA3-256 with explicit domain tags.
* Leaf hash = H("ledger_vm:logs:leaf" || cbor(log)), using the canonical
  encoding from `encoding.log_to_obj`.
* Binary tree; an odd node at any level is paired with itself.
  Node hash = H("ledger_vm:logs:node" || left || right).
* Empty tree root = H("ledger_vm:logs:empty").
"""

from __future__ import annotations

import hashlib
from typing import Iterable, List, Sequence

import cbor2

from ledger_vm.types import LogEvent

from .encoding import log_to_obj

_D_LEAF = b"ledger_vm:logs:leaf"
_D_NODE = b"ledger_vm:logs:node"
_D_EMPTY = b"ledger_vm:logs:empty"


def _h(domain: bytes, *parts: bytes) -> bytes:
    """Domain-separated hash: H(domain || 0x00 || part0 || part1 || ...)."""
    return hashlib.sha3_256(domain + b"\x00" + b"".join(parts)).digest()


def hash_log_leaf(ev: LogEvent) -> bytes:
    return _h(_D_LEAF, cbor2.dumps(log_to_obj(ev), canonical=True))


def _merkle_root(leaves: Sequence[bytes]) -> bytes:
    if not leaves:
        return _h(_D_EMPTY)
    level = list(leaves)
    while len(level) > 1:
        nxt: List[bytes] = []
        for i in range(0, len(level), 2):
            left = level[i]
            right = level[i + 1] if i + 1 < len(level) else left
            nxt.append(_h(_D_NODE, left, right))
        level = nxt
    return level[0]


def compute_logs_root(logs: Iterable[LogEvent]) -> bytes:
    """32-byte SHA3-256 Merkle root over `logs` in order."""
    return _merkle_root([hash_log_leaf(ev) for ev in logs])


__all__ = ["compute_logs_root", "hash_log_leaf"]
