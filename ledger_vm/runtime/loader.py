"""
ledger_vm.runtime.loader — turn a Python contract module into deployable code.

A contract is a plain Python module of top-level functions. This module:
  1) Imports it, from a dotted module name or a path to a `.py` file.
  2) Computes a stable code hash (sha3-256 over the source bytes).
  3) Wraps it in a `ContractCode` that carries the per-deployment immutables.
  4) Resolves public entry points and whether they take an injected `caller`.

Entry point rules
-----------------
* Names starting with "_" are private.
* If the module defines `__all__`, only listed names are public.
* `construct` and `receive` are host hooks and cannot be called directly.
* A function whose first parameter is named `caller` receives the
  authenticated caller address from the engine.
"""

from __future__ import annotations

import hashlib
import importlib
import importlib.util
import inspect
import sys
import threading
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path
from types import ModuleType
from typing import Callable, Dict, Optional, Union

from ledger_vm.errors import UnknownFunction

CONSTRUCT = "construct"
RECEIVE = "receive"
_HOOKS = frozenset((CONSTRUCT, RECEIVE))

ContractSource = Union[str, Path, ModuleType]

_L = threading.RLock()
_FILE_MODULES: Dict[bytes, ModuleType] = {}


@dataclass(eq=False)
class ContractCode:
    """
    Executable code of one deployment.

    `immutables` may only be written while the constructor runs; afterwards
    the map is sealed and shared read-only by the template and its clones.
    """

    module: ModuleType
    code_hash: bytes
    immutables: Dict[bytes, bytes] = field(default_factory=dict)
    sealed: bool = False

    @property
    def name(self) -> str:
        return self.module.__name__

    def entry(self, fn: str, *, address: bytes) -> Callable:
        if not isinstance(fn, str) or not fn or fn.startswith("_") or fn in _HOOKS:
            raise UnknownFunction(f"{fn!r} is not a public entry point", address=address, fn=str(fn))
        exported = getattr(self.module, "__all__", None)
        if exported is not None and fn not in exported:
            raise UnknownFunction(f"{fn!r} is not exported", address=address, fn=fn)
        f = getattr(self.module, fn, None)
        if not inspect.isfunction(f):
            raise UnknownFunction(f"no function {fn!r}", address=address, fn=fn)
        return f

    def hook(self, name: str) -> Optional[Callable]:
        f = getattr(self.module, name, None)
        return f if inspect.isfunction(f) else None


@lru_cache(maxsize=None)
def takes_caller(f: Callable) -> bool:
    """True if the entry point's first parameter is `caller`."""
    params = list(inspect.signature(f).parameters)
    return bool(params) and params[0] == "caller"


def _hash_source(src: bytes) -> bytes:
    return hashlib.sha3_256(src).digest()


def _load_file(path: Path) -> ModuleType:
    src = path.read_bytes()
    h = _hash_source(src)
    with _L:
        mod = _FILE_MODULES.get(h)
        if mod is not None:
            return mod
        name = f"ledger_vm_contract_{path.stem}_{h.hex()[:12]}"
        spec = importlib.util.spec_from_file_location(name, path)
        if spec is None or spec.loader is None:
            raise ImportError(f"cannot load contract from {path}")
        mod = importlib.util.module_from_spec(spec)
        sys.modules[name] = mod
        spec.loader.exec_module(mod)
        _FILE_MODULES[h] = mod
        return mod


def _resolve_module(source: ContractSource) -> ModuleType:
    if isinstance(source, ModuleType):
        return source
    if isinstance(source, Path) or (isinstance(source, str) and source.endswith(".py")):
        return _load_file(Path(source).expanduser().resolve())
    if isinstance(source, str):
        return importlib.import_module(source)
    raise TypeError(f"unsupported contract source: {type(source).__name__}")


def _module_source(mod: ModuleType) -> bytes:
    path = getattr(mod, "__file__", None)
    if path:
        return Path(path).read_bytes()
    return inspect.getsource(mod).encode("utf-8")


def load_code(source: ContractSource) -> ContractCode:
    """Load a contract and return fresh (unsealed) code for one deployment."""
    mod = _resolve_module(source)
    return ContractCode(module=mod, code_hash=_hash_source(_module_source(mod)))


__all__ = ["ContractCode", "ContractSource", "CONSTRUCT", "RECEIVE", "load_code", "takes_caller"]
