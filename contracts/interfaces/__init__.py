# -*- coding: utf-8 -*-
"""
contracts.interfaces
====================

Registry of **contract interfaces**: the named function/event surfaces that
contracts in this repository expose or consume.

Two interfaces ship built in:

- ``FungibleToken``: what every ledger clone exposes and what the factory
  requires of an external fee token (``allowance``, ``transfer_from``,
  ``transfer``, ``balance_of``).
- ``TokenFactory``: the deployment and registry surface of the factory.

Conventions
-----------
- An interface is described by :class:`InterfaceSpec` with fields:
  - ``name``: stable identifier (string), e.g. "FungibleToken".
  - ``abi``: a list of entries ``{"type": "function"|"event", "name": ..., "inputs": [...]}``
    or a dict with top-level ``{"functions": [...], "events": [...]}``.
  - ``version`` / ``description``: optional.
- Registry keys are case-sensitive UpperCamelCase names.

Usage
-----
    from contracts.interfaces import missing_functions
    import contracts.templates.ledger.contract as ledger

    assert missing_functions(ledger, "FungibleToken") == []
"""
from __future__ import annotations

import inspect
from dataclasses import dataclass
from types import ModuleType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union, cast

__all__ = [
    "InterfaceSpec",
    "InterfacesError",
    "register_interface",
    "get_interface",
    "get_abi",
    "list_interfaces",
    "function_names",
    "event_names",
    "missing_functions",
    "FUNGIBLE_TOKEN",
    "TOKEN_FACTORY",
]

# ---------------------------------------------------------------------------
# Types & Errors
# ---------------------------------------------------------------------------

AbiEntry = Mapping[str, Any]
AbiList = List[AbiEntry]
AbiLike = Union[AbiList, Mapping[str, Any]]


class InterfacesError(ValueError):
    """Raised on invalid interface definitions or lookup failures."""


@dataclass(frozen=True)
class InterfaceSpec:
    """
    Description of a reusable contract interface.

    Attributes
    ----------
    name : str
        Stable identifier used as the registry key.
    abi : AbiLike
        Either a list of entries (preferred) or a dict containing
        "functions"/"events" arrays.
    version : Optional[str]
        Semver of the interface (not the implementing contract).
    description : Optional[str]
        Short human-readable description.
    """
    name: str
    abi: AbiLike
    version: Optional[str] = None
    description: Optional[str] = None


_REGISTRY: Dict[str, InterfaceSpec] = {}


# ---------------------------------------------------------------------------
# Validation (lightweight)
# ---------------------------------------------------------------------------

def _coerce_abi_to_list(abi: AbiLike) -> AbiList:
    if isinstance(abi, list):
        if not all(isinstance(x, Mapping) and "type" in x for x in abi):
            raise InterfacesError("ABI list entries must be objects with a 'type'")
        return list(abi)

    if not isinstance(abi, Mapping):
        raise InterfacesError("ABI must be a list or dict")

    parts: AbiList = []
    for key, inferred in (("functions", "function"), ("events", "event")):
        v = abi.get(key)
        if v is None:
            continue
        if not isinstance(v, Sequence):
            raise InterfacesError(f"ABI field '{key}' must be a list when present")
        for entry in v:
            if not isinstance(entry, Mapping):
                raise InterfacesError(f"ABI '{key}' entries must be objects")
            entry = dict(entry)
            entry.setdefault("type", inferred)
            parts.append(entry)
    if not parts:
        raise InterfacesError("ABI dict must contain functions or events")
    return parts


def _validate_minimal(abi_list: AbiList) -> None:
    for i, ent in enumerate(abi_list):
        t = ent.get("type")
        if t not in ("function", "event"):
            raise InterfacesError(f"ABI entry #{i}: invalid 'type' {t!r}")
        if not isinstance(ent.get("name"), str) or not ent["name"]:
            raise InterfacesError(f"ABI {t} #{i} missing/invalid 'name'")
        if "inputs" in ent and not isinstance(ent["inputs"], Sequence):
            raise InterfacesError(f"ABI {t} #{i} 'inputs' must be a list")


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def register_interface(spec: InterfaceSpec, *, overwrite: bool = False) -> None:
    """
    Add or update an interface in the registry.

    Raises
    ------
    InterfacesError
        On invalid name/ABI shape or if overwrite is False and the name exists.
    """
    if not spec.name or not isinstance(spec.name, str):
        raise InterfacesError("register_interface: 'name' must be a non-empty string")

    abi_list = _coerce_abi_to_list(spec.abi)
    _validate_minimal(abi_list)

    if spec.name in _REGISTRY and not overwrite:
        raise InterfacesError(f"register_interface: '{spec.name}' already registered")

    _REGISTRY[spec.name] = InterfaceSpec(
        name=spec.name,
        abi=abi_list,
        version=spec.version,
        description=spec.description,
    )


def get_interface(name: str) -> InterfaceSpec:
    try:
        return _REGISTRY[name]
    except KeyError as e:
        raise InterfacesError(f"get_interface: '{name}' not found") from e


def get_abi(name: str) -> AbiList:
    return cast(AbiList, get_interface(name).abi)


def list_interfaces() -> List[str]:
    return sorted(_REGISTRY.keys())


def function_names(name: str) -> List[str]:
    return [e["name"] for e in get_abi(name) if e["type"] == "function"]


def event_names(name: str) -> List[str]:
    return [e["name"] for e in get_abi(name) if e["type"] == "event"]


def missing_functions(module: ModuleType, name: str) -> List[str]:
    """
    Functions of interface `name` that `module` does not expose as public
    contract entry points (listed in `__all__` when the module defines one).
    """
    exported = getattr(module, "__all__", None)
    out = []
    for fn in function_names(name):
        f = getattr(module, fn, None)
        if not inspect.isfunction(f) or (exported is not None and fn not in exported):
            out.append(fn)
    return out


# ---------------------------------------------------------------------------
# Built-in interfaces
# ---------------------------------------------------------------------------

def _fn(name: str, *inputs: str) -> Dict[str, Any]:
    return {"type": "function", "name": name, "inputs": [{"name": i} for i in inputs]}


def _ev(name: str, *inputs: str) -> Dict[str, Any]:
    return {"type": "event", "name": name, "inputs": [{"name": i} for i in inputs]}


FUNGIBLE_TOKEN = InterfaceSpec(
    name="FungibleToken",
    version="1.0.0",
    description="Balances, allowances and transfers of one fungible token",
    abi={
        "functions": [
            _fn("name"),
            _fn("symbol"),
            _fn("decimals"),
            _fn("total_supply"),
            _fn("balance_of", "account"),
            _fn("allowance", "owner", "spender"),
            _fn("transfer", "to", "amount"),
            _fn("approve", "spender", "amount"),
            _fn("transfer_from", "owner", "to", "amount"),
        ],
        "events": [
            _ev("Transfer", "from", "to", "value"),
            _ev("Approval", "owner", "spender", "value"),
        ],
    },
)

TOKEN_FACTORY = InterfaceSpec(
    name="TokenFactory",
    version="1.0.0",
    description="Clone deployment with fee collection and a creator registry",
    abi={
        "functions": [
            _fn("create_token", "name", "symbol", "decimals", "initial_supply", "pauser"),
            _fn("get_total_tokens"),
            _fn("get_token_at_index", "index"),
            _fn("get_tokens_paginated", "offset", "limit"),
            _fn("get_tokens_by_creator", "creator"),
            _fn("get_creator_token_count", "creator"),
            _fn("is_deployed_token", "token"),
            _fn("deployment_fee"),
            _fn("fee_token"),
            _fn("template"),
        ],
        "events": [
            _ev("TokenCreated", "token", "creator", "pauser", "name", "symbol", "decimals", "initial_supply", "timestamp"),
            _ev("DeploymentFeeCollected", "payer", "token", "amount"),
        ],
    },
)

for _spec in (FUNGIBLE_TOKEN, TOKEN_FACTORY):
    register_interface(_spec)
