# -*- coding: utf-8 -*-
"""
contracts.tests.conftest
========================

Fixtures for the ledger template, the clone factory and the fee token.

- `engine`       fresh strict-mode Engine per test
- `deployer`     deploys factories and the fee token (owner + pauser)
- `alice`/`bob`/`carol`  deterministic 20-byte accounts
- `factory`      factory with no fee
- `fee_token`    fee token; `deployer` holds the supply, alice and bob get
                 FEE_FUNDING each
- `fee_factory`  factory charging FEE units of `fee_token`
- `create`       helper calling `create_token` with sensible defaults
- `write_contract`  write an inline contract to tmp_path, return its path
"""
from __future__ import annotations

import hashlib
import textwrap
from pathlib import Path
from typing import Callable

import pytest

from ledger_vm.config import load_config
from ledger_vm.runtime import ZERO_ADDRESS, Engine

FACTORY = "contracts.templates.factory.contract"
LEDGER = "contracts.templates.ledger.contract"
FEE_TOKEN = "contracts.examples.token.contract"

FEE = 50 * 10**6
FEE_FUNDING = 1_000 * 10**6
SUPPLY = 1_000_000 * 10**18


def account(tag: str) -> bytes:
    """Deterministic test account: first 20 bytes of sha3_256(tag)."""
    return hashlib.sha3_256(b"contracts-tests|" + tag.encode("utf-8")).digest()[:20]


@pytest.fixture
def engine() -> Engine:
    return Engine(config=load_config().with_overrides(strict_mode=True))


@pytest.fixture
def deployer() -> bytes:
    return account("deployer")


@pytest.fixture
def alice() -> bytes:
    return account("alice")


@pytest.fixture
def bob() -> bytes:
    return account("bob")


@pytest.fixture
def carol() -> bytes:
    return account("carol")


@pytest.fixture
def factory(engine: Engine, deployer: bytes) -> bytes:
    return engine.deploy(deployer, FACTORY)


@pytest.fixture
def fee_token(engine: Engine, deployer: bytes, alice: bytes, bob: bytes) -> bytes:
    addr = engine.deploy(deployer, FEE_TOKEN)
    engine.call(deployer, addr, "transfer", alice, FEE_FUNDING)
    engine.call(deployer, addr, "transfer", bob, FEE_FUNDING)
    return addr


@pytest.fixture
def fee_factory(engine: Engine, deployer: bytes, fee_token: bytes) -> bytes:
    return engine.deploy(deployer, FACTORY, fee_token, FEE)


@pytest.fixture
def create(engine: Engine) -> Callable[..., bytes]:
    def _create(
        factory: bytes,
        creator: bytes,
        name: bytes = b"Token",
        symbol: bytes = b"TKN",
        decimals: int = 18,
        supply: int = SUPPLY,
        pauser: bytes = ZERO_ADDRESS,
        value: int = 0,
    ) -> bytes:
        return engine.call(creator, factory, "create_token", name, symbol, decimals, supply, pauser, value=value)

    return _create


@pytest.fixture
def write_contract(tmp_path: Path) -> Callable[[str, str], str]:
    def _write(name: str, src: str) -> str:
        p = tmp_path / f"{name}.py"
        p.write_text(textwrap.dedent(src), encoding="utf-8")
        return str(p)

    return _write
