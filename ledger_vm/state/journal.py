"""
ledger_vm.state.journal — journaling writes, checkpoints, revert/commit.

This module provides a deterministic, in-memory write journal layered over a
committed base state (accounts, per-account storage, and the event log). It
supports nested checkpoints via a stack of overlays. Writes go to the top
overlay; reads consult overlays from top → base. `commit()` merges the top
overlay into the next layer (or the base state if it is the last layer).
`revert()` discards the top overlay.

Key properties
--------------
- Pure Python, no I/O.
- Copy-on-write for accounts (Account objects are copied into overlays).
- Storage overlay per (address, key) with explicit deletion markers.
- Events are journaled too, so a reverted call leaves no records behind.

Intended usage
--------------
    j = Journal()
    j.begin()
    j.account_for_write(addr).credit(10)
    j.storage_set(addr, b"k", b"v")
    j.commit()
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

from ledger_vm.types.events import LogEvent

from .accounts import Account

_DELETED = None


@dataclass
class _Overlay:
    """
    A single journal layer.

    - `accounts`: copies of Account objects modified/created in this layer.
    - `storage`: staged storage changes. `None` means deletion for that key.
    - `logs`: events emitted while this layer was on top.
    """

    accounts: Dict[bytes, Account] = field(default_factory=dict)
    storage: Dict[bytes, Dict[bytes, Optional[bytes]]] = field(default_factory=dict)
    logs: List[LogEvent] = field(default_factory=list)


class Journal:
    """
    A copy-on-write write journal with nested checkpoints.

    API highlights
    --------------
    - begin() / commit() / revert() / depth()
    - get_account(), account_for_write()
    - storage_get(), storage_set(), storage_delete(), storage_items()
    - append_log(), pending_logs(), committed_logs()
    """

    def __init__(self) -> None:
        self._accounts: Dict[bytes, Account] = {}
        self._storage: Dict[bytes, Dict[bytes, bytes]] = {}
        self._logs: List[LogEvent] = []
        self._layers: List[_Overlay] = []

    # --------------------------------------------------------------------- #
    # Checkpointing
    # --------------------------------------------------------------------- #

    def depth(self) -> int:
        """Number of open checkpoints (0 when everything is committed)."""
        return len(self._layers)

    def begin(self) -> int:
        """Start a new checkpoint. Returns the new depth marker."""
        self._layers.append(_Overlay())
        return len(self._layers)

    def commit(self) -> None:
        """Merge the top overlay into its parent, or into the base state."""
        if not self._layers:
            raise RuntimeError("commit without an open checkpoint")
        top = self._layers.pop()
        if self._layers:
            self._merge_layers(self._layers[-1], top)
        else:
            self._apply_to_base(top)

    def revert(self) -> None:
        """Discard the top overlay."""
        if not self._layers:
            raise RuntimeError("revert without an open checkpoint")
        self._layers.pop()

    # --------------------------------------------------------------------- #
    # Accounts
    # --------------------------------------------------------------------- #

    def get_account(self, addr: bytes) -> Optional[Account]:
        """Readonly lookup. Do not mutate the returned object."""
        for layer in reversed(self._layers):
            acc = layer.accounts.get(addr)
            if acc is not None:
                return acc
        return self._accounts.get(addr)

    def account_for_write(self, addr: bytes) -> Account:
        """
        Fetch an Account suitable for mutation in the top layer. A visible
        account is copied up; an absent one is created zeroed.
        """
        if not self._layers:
            raise RuntimeError("write outside of a checkpoint")
        top = self._layers[-1]
        acc = top.accounts.get(addr)
        if acc is not None:
            return acc
        visible = self.get_account(addr)
        acc = visible.copy() if visible is not None else Account()
        top.accounts[addr] = acc
        return acc

    # --------------------------------------------------------------------- #
    # Storage
    # --------------------------------------------------------------------- #

    def storage_get(self, addr: bytes, key: bytes, default: bytes = b"") -> bytes:
        for layer in reversed(self._layers):
            m = layer.storage.get(addr)
            if m is not None and key in m:
                v = m[key]
                return default if v is _DELETED else v
        return self._storage.get(addr, {}).get(key, default)

    def storage_set(self, addr: bytes, key: bytes, value: bytes) -> None:
        """Stage a storage write in the top overlay. Empty value is a deletion."""
        if not self._layers:
            raise RuntimeError("write outside of a checkpoint")
        m = self._layers[-1].storage.setdefault(addr, {})
        m[key] = bytes(value) if value else _DELETED

    def storage_delete(self, addr: bytes, key: bytes) -> None:
        self.storage_set(addr, key, b"")

    def storage_items(self, addr: bytes) -> Iterator[Tuple[bytes, bytes]]:
        """Visible (key, value) pairs for an address, sorted by key."""
        visible = dict(self._storage.get(addr, {}))
        for layer in self._layers:
            for k, v in layer.storage.get(addr, {}).items():
                if v is _DELETED:
                    visible.pop(k, None)
                else:
                    visible[k] = v
        for k in sorted(visible):
            yield k, visible[k]

    # --------------------------------------------------------------------- #
    # Events
    # --------------------------------------------------------------------- #

    def append_log(self, ev: LogEvent) -> None:
        if not self._layers:
            raise RuntimeError("write outside of a checkpoint")
        self._layers[-1].logs.append(ev)

    def pending_logs(self) -> List[LogEvent]:
        """Events staged in all open checkpoints, in emission order."""
        out: List[LogEvent] = []
        for layer in self._layers:
            out.extend(layer.logs)
        return out

    def committed_logs(self) -> List[LogEvent]:
        return list(self._logs)

    # --------------------------------------------------------------------- #
    # Internal merge/apply
    # --------------------------------------------------------------------- #

    @staticmethod
    def _merge_layers(dst: _Overlay, src: _Overlay) -> None:
        dst.accounts.update(src.accounts)
        for addr, writes in src.storage.items():
            dst.storage.setdefault(addr, {}).update(writes)
        dst.logs.extend(src.logs)

    def _apply_to_base(self, layer: _Overlay) -> None:
        self._accounts.update(layer.accounts)
        for addr, writes in layer.storage.items():
            m = self._storage.setdefault(addr, {})
            for k, v in writes.items():
                if v is _DELETED:
                    m.pop(k, None)
                else:
                    m[k] = v
            if not m:
                del self._storage[addr]
        self._logs.extend(layer.logs)


__all__ = ["Journal"]
