"""
ledger_vm.runtime.calls_api — contract-to-contract interaction.

- call(to, fn, *args, value=0) -> Any             # failure propagates
- try_call(to, fn, *args, value=0) -> (ok, ret)   # failure reported, not raised
- view(to, fn, *args) -> Any                      # read-only sub-call
- try_view(to, fn, *args) -> (ok, ret)            # read-only, failure reported
- create(source, *args, value=0) -> address       # deploy a new contract
- clone(template) -> address                      # delegate instance of template

The callee sees the calling contract's address as its `caller`. A failed
sub-call always unwinds its own writes; with `try_call` and `try_view` the
caller decides what happens next, and `ret` holds the failure reason bytes (the revert tag,
or the host error code).
"""

from __future__ import annotations

from typing import Any, Tuple

from .context import active_engine
from .loader import ContractSource


def call(to: bytes, fn: str, *args: Any, value: int = 0) -> Any:
    return active_engine().nested_call(to, fn, args, value=value)


def try_call(to: bytes, fn: str, *args: Any, value: int = 0) -> Tuple[bool, Any]:
    return active_engine().try_nested_call(to, fn, args, value=value)


def view(to: bytes, fn: str, *args: Any) -> Any:
    return active_engine().nested_call(to, fn, args, read_only=True)


def try_view(to: bytes, fn: str, *args: Any) -> Tuple[bool, Any]:
    return active_engine().try_nested_call(to, fn, args, read_only=True)


def create(source: ContractSource, *args: Any, value: int = 0) -> bytes:
    return active_engine().nested_create(source, args, value=value)


def clone(template: bytes) -> bytes:
    return active_engine().nested_clone(template)


__all__ = ["call", "try_call", "view", "try_view", "create", "clone"]
